from django import forms

from .models import Comment, Restaurant


class RestaurantForm(forms.ModelForm):
    """
    Admin panel form for creating/editing a Restaurant.

    NOTE: the photo is not a model field here; the view hands `image` to the
    upload helper and stores the returned URL.
    """
    image = forms.FileField(
        required=False,
        widget=forms.ClearableFileInput(attrs={"class": "form-control", "accept": "image/*"}),
    )

    class Meta:
        model = Restaurant
        fields = ["name", "category", "tel", "address", "opening_hours", "description"]
        widgets = {
            "name": forms.TextInput(attrs={"class": "form-control", "placeholder": "Restaurant name"}),
            "category": forms.Select(attrs={"class": "form-select"}),
            "tel": forms.TextInput(attrs={"class": "form-control", "placeholder": "02-1234-5678"}),
            "address": forms.TextInput(attrs={"class": "form-control"}),
            "opening_hours": forms.TextInput(attrs={"class": "form-control", "placeholder": "08:00"}),
            "description": forms.Textarea(attrs={"class": "form-control", "rows": 4}),
        }

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise forms.ValidationError("Restaurant name is required!")
        return name


class CommentForm(forms.ModelForm):
    class Meta:
        model = Comment
        fields = ["text"]
        widgets = {
            "text": forms.Textarea(attrs={
                "rows": 3,
                "class": "form-control",
                "placeholder": "Share your experience...",
            }),
        }

    def clean_text(self):
        text = (self.cleaned_data.get("text") or "").strip()
        if not text:
            raise forms.ValidationError("Comment text is required!")
        return text
