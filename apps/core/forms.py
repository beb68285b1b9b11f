# apps/core/forms.py
from django import forms

REQUIRED_LAYOUT_KEYS = ('i', 'x', 'y', 'w', 'h')


class LayoutForm(forms.Form):
    """Układ dashboardu w formacie react-grid-layout."""
    name = forms.CharField(max_length=100, required=False)
    layout = forms.JSONField()
    setActive = forms.BooleanField(required=False)

    def clean_layout(self):
        layout = self.cleaned_data.get('layout')
        if not isinstance(layout, list):
            raise forms.ValidationError("Layout array is required")

        for item in layout:
            # x/y mogą być 0, w/h nie
            if (not isinstance(item, dict) or not item.get('i')
                    or item.get('x') is None or item.get('y') is None
                    or not item.get('w') or not item.get('h')):
                raise forms.ValidationError("Each layout item must have i, x, y, w, and h properties")
        return layout
