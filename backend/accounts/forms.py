from django import forms

from .models import Capability, Role


class LoginForm(forms.Form):
    username = forms.CharField(max_length=150)
    password = forms.CharField(widget=forms.PasswordInput)


class StaffForm(forms.Form):
    username = forms.CharField(max_length=150)
    full_name = forms.CharField(max_length=255)
    password = forms.CharField(required=False, widget=forms.PasswordInput)
    role = forms.ChoiceField(choices=Role.choices, initial=Role.MITRA)
    permissions = forms.MultipleChoiceField(choices=Capability.choices, required=False)

    def clean_role(self):
        role = self.cleaned_data["role"]
        # ADMIN is reserved for the master account; RELAWAN accounts come from the volunteer roster
        if role in (Role.ADMIN, Role.RELAWAN):
            raise forms.ValidationError("Role not assignable from staff management.")
        return role
