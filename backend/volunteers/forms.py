from django import forms

from accounts.models import Capability
from .models import Division, Volunteer


class VolunteerForm(forms.Form):
    name = forms.CharField(max_length=255)
    division = forms.ChoiceField(choices=Division.choices)
    phone = forms.CharField(max_length=32, required=False)
    status = forms.ChoiceField(choices=Volunteer.Status.choices, required=False)
    is_coordinator = forms.BooleanField(required=False)
    give_access = forms.BooleanField(required=False)
    username = forms.CharField(max_length=150, required=False)
    password = forms.CharField(required=False, widget=forms.PasswordInput)
    permissions = forms.MultipleChoiceField(choices=Capability.choices, required=False)

    def clean(self):
        data = super().clean()
        if data.get("give_access") and not (data.get("username") or "").strip():
            self.add_error("username", "Username wajib diisi untuk akses aplikasi.")
        if not data.get("status"):
            data["status"] = Volunteer.Status.ACTIVE
        # Unticked permission boxes on a new login fall back to the division defaults.
        if not data.get("permissions") and "permissions" not in self.data:
            data["permissions"] = None
        return data
