# apps/habits/forms.py
from django import forms
from .models import Category, Habit, HabitEntry


class CategoryForm(forms.ModelForm):
    class Meta:
        model = Category
        fields = ['name', 'icon', 'icon_color', 'sort_order']

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise forms.ValidationError("Name is required")
        return name


class HabitForm(forms.ModelForm):
    class Meta:
        model = Habit
        fields = ['name', 'category', 'parent_habit', 'icon', 'icon_color', 'is_active', 'sort_order', 'daily_target']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Do usuniętych kategorii nie przypinamy nowych nawyków
        self.fields['category'].queryset = Category.objects.filter(is_deleted=False)
        self.fields['parent_habit'].queryset = Habit.objects.filter(is_deleted=False)

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise forms.ValidationError("Name is required")
        return name

    def clean_parent_habit(self):
        parent = self.cleaned_data.get('parent_habit')
        if parent and self.instance.pk and parent.pk == self.instance.pk:
            raise forms.ValidationError("Habit cannot be its own parent")
        return parent


class HabitEntryForm(forms.ModelForm):
    class Meta:
        model = HabitEntry
        fields = ['date', 'status', 'count', 'notes']


class AutoFillForm(forms.Form):
    startDate = forms.DateField(required=False)
    status = forms.ChoiceField(choices=HabitEntry.Status.choices, required=False)
    habitIds = forms.ModelMultipleChoiceField(queryset=Habit.objects.filter(is_deleted=False), required=False)

    def clean_status(self):
        return self.cleaned_data.get('status') or HabitEntry.Status.MISSED
