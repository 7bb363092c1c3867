from django import forms
from django.contrib.auth import get_user_model


User = get_user_model()


class SignupForm(forms.Form):
    email = forms.EmailField(max_length=254)
    password = forms.CharField(max_length=128, strip=False)
    restaurantName = forms.CharField(max_length=160, required=False)

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("Email already registered")
        return email


class LoginForm(forms.Form):
    email = forms.CharField(max_length=254)
    password = forms.CharField(max_length=128, strip=False)

    def clean_email(self):
        return self.cleaned_data["email"].strip().lower()


class ProfileForm(forms.Form):
    # every field optional: only keys present in the request body are applied
    restaurantName = forms.CharField(max_length=160, required=False)
    hours = forms.CharField(max_length=255, required=False)
    location = forms.CharField(max_length=255, required=False)
    phone = forms.CharField(max_length=40, required=False)
