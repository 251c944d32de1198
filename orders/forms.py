from django import forms

from .services import PAYMENT_METHODS, ORDER_STATUSES


class CheckoutForm(forms.Form):
    first_name = forms.CharField(max_length=100)
    last_name = forms.CharField(max_length=100)
    email = forms.EmailField()
    address = forms.CharField(max_length=255)
    city = forms.CharField(max_length=100)
    postal_code = forms.CharField(max_length=20)
    country = forms.CharField(max_length=100)
    payment_method = forms.ChoiceField(
        choices=PAYMENT_METHODS,
        initial='credit',
        widget=forms.RadioSelect,
    )

    @classmethod
    def initial_for(cls, user):
        """Prefill the contact fields from the signed-in user"""
        return {
            'first_name': user.first_name,
            'last_name': user.last_name,
            'email': user.email,
            'payment_method': 'credit',
        }


class OrderStatusForm(forms.Form):
    status = forms.ChoiceField(choices=[(s, s.capitalize()) for s in ORDER_STATUSES])
