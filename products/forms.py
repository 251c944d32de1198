from django import forms

from common.utils import validate_image_file


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleImageField(forms.FileField):
    """
    File field accepting several images under one name
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('widget', MultipleFileInput(attrs={'accept': 'image/*'}))
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single_file_clean = super().clean
        if isinstance(data, (list, tuple)):
            files = [single_file_clean(d, initial) for d in data]
        else:
            files = [single_file_clean(data, initial)] if data else []
        files = [f for f in files if f]
        for image in files:
            is_valid, message = validate_image_file(image)
            if not is_valid:
                raise forms.ValidationError(f"{image.name}: {message}")
        return files


class ProductForm(forms.Form):
    name = forms.CharField(max_length=200, label='Product Name')
    price = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0, label='Price ($)')
    description = forms.CharField(widget=forms.Textarea(attrs={'rows': 3}))
    category = forms.CharField(max_length=100)
    stock = forms.IntegerField(min_value=0, label='Stock Quantity')
    images = MultipleImageField(required=False, label='Product Images')

    def __init__(self, *args, editing=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.editing = editing

    def clean_images(self):
        images = self.cleaned_data.get('images') or []
        if not images and not self.editing:
            raise forms.ValidationError('Please select at least one image')
        return images

    @classmethod
    def initial_for(cls, product):
        return {
            'name': product['name'],
            'price': product['price'],
            'description': product['description'],
            'category': product['category'],
            'stock': product['stock'],
        }
