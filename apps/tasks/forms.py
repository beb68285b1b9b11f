#apps/tasks/forms.py
from django import forms
from .models import Project, Tag, Task


class TaskForm(forms.ModelForm):
    class Meta:
        model = Task
        fields = ['title', 'description', 'planned_date', 'status', 'priority', 'project', 'tags', 'sort_order']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['project'].queryset = Project.objects.filter(is_deleted=False)
        self.fields['tags'].queryset = Tag.objects.filter(is_deleted=False)

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise forms.ValidationError("Title is required")
        return title


class ProjectForm(forms.ModelForm):
    class Meta:
        model = Project
        fields = ['name', 'description', 'icon', 'icon_color', 'color']


class TagForm(forms.ModelForm):
    class Meta:
        model = Tag
        fields = ['name', 'color']
