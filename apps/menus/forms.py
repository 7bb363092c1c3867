import re
import uuid

from django import forms
from django.core.validators import RegexValidator


HEX_COLOR = RegexValidator(r"^#[0-9A-Fa-f]{3,8}$", "Enter a hex colour like #E85D2C.")
TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

MAX_TAGS = 20
MAX_TAG_LENGTH = 40


class PatchFormMixin:
    """`partial=True` turns every field optional, for update endpoints.

    Fields listed in `non_blank` still refuse an empty value when sent.
    """

    non_blank = ("name",)

    def __init__(self, *args, partial: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.partial = partial
        if partial:
            for field in self.fields.values():
                field.required = False

    def clean(self):
        cleaned = super().clean()
        # a null sort_order means "leave it where it is"
        if cleaned.get("sort_order", 0) is None:
            cleaned.pop("sort_order")
        if not self.partial:
            return cleaned
        for name in self.non_blank:
            if name in self.data and name in cleaned and not cleaned[name]:
                self.add_error(name, "This field may not be blank.")
        return cleaned


class TagsField(forms.Field):
    """List of unique, stripped strings; a comma-separated string is accepted too."""

    def to_python(self, value):
        if value in (None, ""):
            return []
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            raise forms.ValidationError("Tags must be a list of strings.")
        tags = []
        for tag in value:
            if not isinstance(tag, str):
                raise forms.ValidationError("Tags must be a list of strings.")
            tag = tag.strip()
            if len(tag) > MAX_TAG_LENGTH:
                raise forms.ValidationError(f"Tags are limited to {MAX_TAG_LENGTH} characters.")
            if tag and tag not in tags:
                tags.append(tag)
        if len(tags) > MAX_TAGS:
            raise forms.ValidationError(f"At most {MAX_TAGS} tags.")
        return tags


class IdListField(forms.Field):
    """List of record ids. Malformed ids are dropped like unknown ones."""

    def to_python(self, value):
        if value in (None, ""):
            return []
        if not isinstance(value, (list, tuple)):
            raise forms.ValidationError("Expected a list of ids.")
        ids = []
        for raw in value:
            try:
                ids.append(uuid.UUID(str(raw)))
            except ValueError:
                ids.append(None)
        return ids


class PriceField(forms.DecimalField):
    def __init__(self, **kwargs):
        kwargs.setdefault("max_digits", 9)
        kwargs.setdefault("decimal_places", 2)
        kwargs.setdefault("min_value", 0)
        super().__init__(**kwargs)

    def to_python(self, value):
        # JSON numbers arrive as floats; round away binary noise first
        if isinstance(value, bool):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        if isinstance(value, float):
            value = repr(round(value, 2))
        return super().to_python(value)


class MenuForm(PatchFormMixin, forms.Form):
    name = forms.CharField(max_length=160)
    description = forms.CharField(required=False)
    logo_url = forms.CharField(max_length=500, required=False)
    primary_color = forms.CharField(max_length=16, required=False, validators=[HEX_COLOR])
    bg_color = forms.CharField(max_length=16, required=False, validators=[HEX_COLOR])
    font = forms.CharField(max_length=64, required=False)
    is_active = forms.BooleanField(required=False)
    languages = forms.JSONField(required=False)
    translations = forms.JSONField(required=False)
    order_config = forms.JSONField(required=False)

    non_blank = ("name", "primary_color", "bg_color", "font")

    def clean_languages(self):
        value = self.cleaned_data.get("languages") or []
        if not isinstance(value, list) or not all(isinstance(code, str) and code for code in value):
            raise forms.ValidationError("Languages must be a list of language codes.")
        seen = []
        for code in value:
            code = code.strip().lower()
            if code and code not in seen:
                seen.append(code)
        return seen

    def clean_translations(self):
        value = self.cleaned_data.get("translations") or {}
        if not isinstance(value, dict) or not all(isinstance(v, dict) for v in value.values()):
            raise forms.ValidationError("Translations must map a language to {record id: {name, description}}.")
        for per_lang in value.values():
            for entry in per_lang.values():
                if not isinstance(entry, dict):
                    raise forms.ValidationError("Each translation must be an object with name/description.")
        return value

    def clean_order_config(self):
        value = self.cleaned_data.get("order_config") or {}
        if not isinstance(value, dict):
            raise forms.ValidationError("Order config must be an object.")
        return {
            "enabled": bool(value.get("enabled", False)),
            "type": str(value.get("type") or "phone"),
            "value": str(value.get("value") or ""),
        }


class CategoryForm(PatchFormMixin, forms.Form):
    name = forms.CharField(max_length=160, required=False)
    description = forms.CharField(required=False)
    sort_order = forms.IntegerField(min_value=0, required=False)


class ItemForm(PatchFormMixin, forms.Form):
    name = forms.CharField(max_length=160, required=False)
    description = forms.CharField(required=False)
    price = PriceField(required=False)
    image_url = forms.CharField(max_length=500, required=False)
    tags = TagsField(required=False)
    is_available = forms.BooleanField(required=False)
    is_featured = forms.BooleanField(required=False)
    sort_order = forms.IntegerField(min_value=0, required=False)

    def clean_price(self):
        value = self.cleaned_data.get("price")
        return value if value is not None else 0


class ReorderForm(forms.Form):
    ids = IdListField()


class SpecialsForm(forms.Form):
    weekdays = forms.JSONField(required=False)
    happy_hour = forms.JSONField(required=False)

    def clean_weekdays(self):
        value = self.cleaned_data.get("weekdays") or {}
        if not isinstance(value, dict):
            raise forms.ValidationError("Weekdays must map 0-6 to a list of specials.")
        cleaned = {}
        for day, entries in value.items():
            day = str(day)
            if day not in {str(n) for n in range(7)}:
                raise forms.ValidationError(f"Unknown weekday {day!r}; use 0 (Monday) to 6 (Sunday).")
            if not isinstance(entries, list):
                raise forms.ValidationError("Each weekday holds a list of specials.")
            rows = []
            for entry in entries:
                if not isinstance(entry, dict) or not entry.get("item_id"):
                    raise forms.ValidationError("Each special needs an item_id.")
                price = entry.get("price")
                if price is not None:
                    try:
                        price = round(float(price), 2)
                    except (TypeError, ValueError):
                        raise forms.ValidationError("Special price must be a number.")
                    if price < 0:
                        raise forms.ValidationError("Special price must be positive.")
                rows.append({"item_id": str(entry["item_id"]), "price": price, "label": str(entry.get("label") or "")})
            cleaned[day] = rows
        return cleaned

    def clean_happy_hour(self):
        value = self.cleaned_data.get("happy_hour") or {}
        if not isinstance(value, dict):
            raise forms.ValidationError("Happy hour must be an object.")
        start = str(value.get("start") or "")
        end = str(value.get("end") or "")
        enabled = bool(value.get("enabled", False))
        if enabled and not (TIME_OF_DAY.match(start) and TIME_OF_DAY.match(end)):
            raise forms.ValidationError("Happy hour start/end must be HH:MM.")
        days = value.get("days") or []
        if not isinstance(days, list) or not all(isinstance(d, int) and 0 <= d <= 6 for d in days):
            raise forms.ValidationError("Happy hour days must be weekday numbers 0-6.")
        return {
            "enabled": enabled,
            "start": start,
            "end": end,
            "label": str(value.get("label") or ""),
            "days": sorted(set(days)),
        }
