# apps/measurements/forms.py
from django import forms
from .models import Measurement, MeasurementEntry, MeasurementTarget


class MeasurementForm(forms.ModelForm):
    class Meta:
        model = Measurement
        fields = ['type', 'name', 'unit']


class MeasurementEntryForm(forms.ModelForm):
    class Meta:
        model = MeasurementEntry
        fields = ['date', 'value']


class MeasurementTargetForm(forms.ModelForm):
    class Meta:
        model = MeasurementTarget
        fields = ['start_value', 'goal_value', 'reach_goal_value', 'start_date', 'goal_date']

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        goal_date = cleaned_data.get('goal_date')

        # Meta w tym samym dniu co start jest dozwolona (cel "zdegenerowany"),
        # meta przed startem - nie.
        if start_date and goal_date and goal_date < start_date:
            self.add_error('goal_date', "Goal date cannot be before start date")

        return cleaned_data
