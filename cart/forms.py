from django import forms


class AddToCartForm(forms.Form):
    quantity = forms.IntegerField(min_value=1, initial=1)


class UpdateQuantityForm(forms.Form):
    # Zero or less removes the item
    quantity = forms.IntegerField()
