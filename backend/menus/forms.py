from django import forms


class MenuPlanForm(forms.Form):
    name = forms.CharField(max_length=255)
    portions = forms.IntegerField(min_value=0, required=False)
    ingredients = forms.JSONField()

    def clean_ingredients(self):
        lines = self.cleaned_data["ingredients"]
        if not isinstance(lines, list) or not lines:
            raise forms.ValidationError("Minimal satu bahan wajib diisi.")
        return lines
