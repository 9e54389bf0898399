from django import forms

from .models import StockItem
from .services import MODES


class StockItemForm(forms.ModelForm):
    class Meta:
        model = StockItem
        fields = ["name", "category", "item_type", "quantity", "unit", "min_threshold"]

    def clean_name(self):
        name = self.cleaned_data["name"].strip()
        if not name:
            raise forms.ValidationError("Nama barang wajib diisi.")
        return name

    def clean_quantity(self):
        q = self.cleaned_data["quantity"]
        if q < 0:
            raise forms.ValidationError("Stok tidak boleh negatif.")
        return q


class StockMutationForm(forms.Form):
    mode = forms.ChoiceField(choices=[(m, m) for m in MODES])
    amount = forms.DecimalField(max_digits=12, decimal_places=2)
    notes = forms.CharField(required=False, max_length=500)
