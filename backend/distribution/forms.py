from django import forms

from .services import DistributionError, parse_pickup_count


class BulkDistributionForm(forms.Form):
    """`entries`: {"SDN MARTAJASAH": 250, ...} or [{"destination": ..., "portions": ...}, ...]."""

    entries = forms.JSONField()
    recipient_name = forms.CharField(max_length=255, required=False)

    def clean_entries(self):
        raw = self.cleaned_data["entries"]
        if isinstance(raw, dict):
            pairs = list(raw.items())
        elif isinstance(raw, list):
            try:
                pairs = [(row["destination"], row.get("portions", 0)) for row in raw]
            except (TypeError, KeyError, AttributeError):
                raise forms.ValidationError("Format tujuan tidak valid.")
        else:
            raise forms.ValidationError("Format tujuan tidak valid.")
        if not pairs:
            raise forms.ValidationError("Pilih setidaknya satu sekolah tujuan.")
        return pairs


class DeliveryEvidenceForm(forms.Form):
    lat = forms.FloatField(required=False, min_value=-90, max_value=90)
    lng = forms.FloatField(required=False, min_value=-180, max_value=180)
    address = forms.CharField(max_length=500, required=False)

    def location(self) -> dict | None:
        data = self.cleaned_data
        if data.get("lat") is None or data.get("lng") is None:
            return None
        loc = {"lat": data["lat"], "lng": data["lng"]}
        if data.get("address"):
            loc["address"] = data["address"]
        return loc


class PickupFinishForm(forms.Form):
    count = forms.CharField(max_length=12)

    def clean_count(self):
        try:
            return parse_pickup_count(self.cleaned_data["count"])
        except DistributionError as e:
            raise forms.ValidationError(str(e))
