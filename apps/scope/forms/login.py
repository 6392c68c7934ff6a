# apps/scope/forms/login.py

from django import forms

from ..services.login import ubicacion_general


class LoginForm(forms.Form):
    email = forms.EmailField(label="Email")
    password = forms.CharField(label="Contraseña", widget=forms.PasswordInput)
    ubicacion = forms.CharField(
        label="Ubicación",
        help_text="'general' para acceso consolidado, o el id de la sucursal.",
    )

    def clean_ubicacion(self):
        valor = self.cleaned_data["ubicacion"].strip().lower()
        if valor == ubicacion_general():
            return valor
        try:
            return int(valor)
        except ValueError:
            raise forms.ValidationError("Ubicación inválida.")


class CambiarSucursalForm(forms.Form):
    # vacío = volver a todas las sucursales
    sucursal = forms.IntegerField(required=False, min_value=1)
