from django import forms


class ProcurementForm(forms.Form):
    supplier = forms.CharField(max_length=255)
    item_name = forms.CharField(max_length=255)
    quantity = forms.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    price = forms.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    operational = forms.BooleanField(required=False)
    source_menu_id = forms.CharField(max_length=36, required=False)


class ProcurementEditForm(forms.Form):
    FIELDS = (("supplier", "supplier"), ("price", "price"))

    field = forms.ChoiceField(choices=FIELDS)
    value = forms.CharField(max_length=255)
