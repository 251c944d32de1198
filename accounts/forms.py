from django import forms

from .services import ROLE_CHOICES, STATUS_CHOICES, STATUS_ACTIVE


class UserForm(forms.Form):
    name = forms.CharField(max_length=100)
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput(render_value=False), required=False)
    role = forms.ChoiceField(choices=ROLE_CHOICES, initial='user')
    status = forms.ChoiceField(choices=STATUS_CHOICES, initial=STATUS_ACTIVE)

    def __init__(self, *args, editing=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.editing = editing
        if editing:
            self.fields['password'].help_text = 'Leave blank to keep the current password'

    def clean_password(self):
        password = self.cleaned_data.get('password')
        if not password and not self.editing:
            raise forms.ValidationError('Password is required')
        return password

    @classmethod
    def initial_for(cls, user):
        return {
            'name': user['name'],
            'email': user['email'],
            'role': user['role'],
            'status': user['status'],
        }
