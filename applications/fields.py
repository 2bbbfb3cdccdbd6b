"""
Field descriptors for the chef application form.

Questions are data: each ``ChefQuestion`` row becomes a ``FieldDescriptor``
and ``build_application_form`` turns a list of descriptors into a Django form.
Anything field-specific (placeholders, upload slots) is keyed on the stable
``field_key``, never on the label an admin can rename.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List

from django import forms
from django.core.validators import RegexValidator

TEXT = 'text'
TEXTAREA = 'textarea'
EMAIL = 'email'
PHONE = 'phone'
NUMBER = 'number'
PHOTO = 'photo'
VIDEO = 'video'

UPLOAD_KINDS = frozenset({PHOTO, VIDEO})

KIND_PLACEHOLDERS = {
    EMAIL: 'your.email@example.com',
    PHONE: 'Your phone number',
    NUMBER: 'Enter amount',
}

KEY_PLACEHOLDERS = {
    'availability': 'Example: Monday-Friday evenings, Weekends all day',
    'languages': 'Example: English, Hindi, Punjabi, Gujarati',
    'frequency_preference': 'Example: Weekly bookings preferred, one-off events welcome',
    'dietary_specialties': 'Example: Vegan, Jain, Gluten-free, Low-oil cooking',
    'experience_years': 'Example: 5 (years of cooking experience)',
    'travel_distance': "Example: 10 (miles you're willing to travel)",
    'minimum_booking': 'Example: 3 (minimum hours per booking)',
    'special_events': 'Example: Birthday parties, Wedding celebrations, Anniversary dinners, Family gatherings',
    'house_help_services': 'Example: Kitchen cleaning, Grocery shopping, Basic meal prep, Dishwashing',
}

# Which file_uploads slot each upload question fills.
UPLOAD_SLOTS = {
    'profile_photo': 'profile_photos',
    'food_photos': 'food_photos',
    'introduction_video': 'introduction_videos',
}

phone_validator = RegexValidator(r'^\+?[\d\s().-]{7,20}$', 'Please enter a valid phone number')


@dataclass(frozen=True)
class FieldDescriptor:
    key: str
    label: str
    kind: str = TEXT
    required: bool = False
    hint: str = ''
    constraints: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_upload(self) -> bool:
        return self.kind in UPLOAD_KINDS

    @property
    def placeholder(self) -> str:
        if self.hint:
            return self.hint
        if self.key in KEY_PLACEHOLDERS:
            return KEY_PLACEHOLDERS[self.key]
        if self.kind == PHOTO:
            return 'Upload your profile photo' if self.upload_slot == 'profile_photos' else 'Upload photos of your food'
        if self.kind == VIDEO:
            return 'Upload a short video introducing yourself'
        return KIND_PLACEHOLDERS.get(self.kind, f"Enter your {self.label.lower()}")

    @property
    def upload_slot(self):
        if not self.is_upload:
            return None
        return UPLOAD_SLOTS.get(self.key, 'introduction_videos' if self.kind == VIDEO else 'food_photos')

    def form_field(self):
        """The Django form field for this descriptor; uploads have none."""
        attrs = {'placeholder': self.placeholder}
        common = {'label': self.label, 'required': self.required, 'help_text': self.hint}
        max_length = self.constraints.get('max_length')

        if self.kind == TEXTAREA:
            return forms.CharField(max_length=max_length, widget=forms.Textarea(attrs=attrs), **common)
        if self.kind == EMAIL:
            return forms.EmailField(max_length=max_length, widget=forms.EmailInput(attrs=attrs), **common)
        if self.kind == PHONE:
            return forms.CharField(
                max_length=max_length or 30,
                validators=[phone_validator],
                widget=forms.TextInput(attrs=attrs),
                **common,
            )
        if self.kind == NUMBER:
            return forms.DecimalField(
                min_value=self.constraints.get('min_value'),
                max_value=self.constraints.get('max_value'),
                widget=forms.NumberInput(attrs=attrs),
                **common,
            )
        if self.is_upload:
            return None
        return forms.CharField(max_length=max_length, widget=forms.TextInput(attrs=attrs), **common)

    def as_dict(self):
        return {
            'key': self.key,
            'label': self.label,
            'kind': self.kind,
            'required': self.required,
            'hint': self.hint,
            'placeholder': self.placeholder,
            'upload_slot': self.upload_slot,
            'constraints': {k: float(v) if isinstance(v, Decimal) else v for k, v in self.constraints.items()},
        }


class ChefApplicationForm(forms.Form):
    def __init__(self, *args, descriptors=(), **kwargs):
        super().__init__(*args, **kwargs)
        for descriptor in descriptors:
            form_field = descriptor.form_field()
            if form_field is not None:
                self.fields[descriptor.key] = form_field


def build_application_form(descriptors: List[FieldDescriptor], data=None):
    """A bound form with one field per non-upload descriptor, in order."""
    return ChefApplicationForm(data, descriptors=descriptors)


def to_json_value(value):
    """Form values as stored in ``ChefApplication.answers``."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, str):
        return value.strip()
    return value


def visible_descriptors():
    from .models import ChefQuestion

    return [q.descriptor() for q in ChefQuestion.objects.filter(is_visible=True)]
