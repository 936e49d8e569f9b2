from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import UserCreationForm
from django.utils.translation import gettext_lazy as _

from .models import MenuCategory, MenuItem, Order, OrderItem, Profile, UserRole
from .services.menu_service import parse_allergens


class MenuCategoryForm(forms.ModelForm):
    class Meta:
        model = MenuCategory
        fields = ['name', 'description', 'display_order', 'is_active']
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'input', 'placeholder': _('Category name'),
            }),
            'description': forms.Textarea(attrs={
                'class': 'textarea', 'rows': 2,
            }),
            'display_order': forms.NumberInput(attrs={
                'class': 'input', 'min': '0',
            }),
            'is_active': forms.CheckboxInput(attrs={'class': 'toggle'}),
        }


class MenuItemForm(forms.ModelForm):
    allergens = forms.CharField(
        required=False,
        label=_('Allergens (comma-separated)'),
        widget=forms.TextInput(attrs={
            'class': 'input',
            'placeholder': _('e.g. Gluten, Nuts, Dairy'),
        }),
    )

    class Meta:
        model = MenuItem
        fields = [
            'category', 'name', 'description', 'price', 'image_url',
            'display_order', 'is_active', 'is_available', 'allergens',
        ]
        widgets = {
            'category': forms.Select(attrs={'class': 'select'}),
            'name': forms.TextInput(attrs={
                'class': 'input', 'placeholder': _('Item name'),
            }),
            'description': forms.Textarea(attrs={
                'class': 'textarea', 'rows': 3,
            }),
            'price': forms.NumberInput(attrs={
                'class': 'input', 'step': '0.01', 'min': '0',
            }),
            'image_url': forms.URLInput(attrs={
                'class': 'input', 'placeholder': 'https://',
            }),
            'display_order': forms.NumberInput(attrs={
                'class': 'input', 'min': '0',
            }),
            'is_active': forms.CheckboxInput(attrs={'class': 'toggle'}),
            'is_available': forms.CheckboxInput(attrs={'class': 'toggle'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance and self.instance.allergens:
            self.initial['allergens'] = ', '.join(self.instance.allergens)

    def clean_allergens(self):
        return parse_allergens(self.cleaned_data.get('allergens'))


class OrderForm(forms.ModelForm):
    class Meta:
        model = Order
        fields = [
            'customer_name', 'customer_email', 'customer_phone', 'customer_notes',
            'order_type', 'table_number', 'estimated_ready_time',
        ]
        widgets = {
            'customer_name': forms.TextInput(attrs={
                'class': 'input', 'placeholder': _('Customer name'),
            }),
            'customer_email': forms.EmailInput(attrs={'class': 'input'}),
            'customer_phone': forms.TextInput(attrs={'class': 'input'}),
            'customer_notes': forms.Textarea(attrs={
                'class': 'textarea', 'rows': 3,
                'placeholder': _('Order notes'),
            }),
            'order_type': forms.Select(attrs={'class': 'select'}),
            'table_number': forms.NumberInput(attrs={
                'class': 'input', 'min': '1',
            }),
            'estimated_ready_time': forms.DateTimeInput(attrs={
                'class': 'input', 'type': 'datetime-local',
            }),
        }


class OrderItemForm(forms.ModelForm):
    class Meta:
        model = OrderItem
        fields = ['menu_item', 'quantity', 'special_instructions']
        widgets = {
            'menu_item': forms.Select(attrs={'class': 'select'}),
            'quantity': forms.NumberInput(attrs={
                'class': 'input', 'min': '1', 'value': '1',
            }),
            'special_instructions': forms.Textarea(attrs={
                'class': 'textarea', 'rows': 2,
                'placeholder': _('Special instructions'),
            }),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['menu_item'].queryset = MenuItem.objects.filter(
            is_active=True, is_available=True,
        ).order_by('display_order', 'name')


class OrderStatusForm(forms.Form):
    status = forms.ChoiceField(
        choices=Order.STATUS_CHOICES,
        widget=forms.Select(attrs={'class': 'select'}),
    )


class OrderFilterForm(forms.Form):
    q = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'input',
            'placeholder': _('Search orders...'),
        }),
    )
    status = forms.ChoiceField(
        required=False,
        choices=[('', _('All Statuses'))] + list(Order.STATUS_CHOICES),
        widget=forms.Select(attrs={'class': 'select'}),
    )
    order_type = forms.ChoiceField(
        required=False,
        choices=[('', _('All Types'))] + list(Order.ORDER_TYPE_CHOICES),
        widget=forms.Select(attrs={'class': 'select'}),
    )
    date_from = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'class': 'input', 'type': 'date'}),
    )
    date_to = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'class': 'input', 'type': 'date'}),
    )


class ProfileForm(forms.ModelForm):
    class Meta:
        model = Profile
        fields = ['full_name', 'avatar_url']
        widgets = {
            'full_name': forms.TextInput(attrs={'class': 'input'}),
            'avatar_url': forms.URLInput(attrs={'class': 'input', 'placeholder': 'https://'}),
        }


class RoleAssignForm(forms.Form):
    user = forms.CharField(
        label=_('Username or email'),
        widget=forms.TextInput(attrs={'class': 'input'}),
    )
    role = forms.ChoiceField(
        choices=UserRole.ROLE_CHOICES,
        widget=forms.Select(attrs={'class': 'select'}),
    )


class SignupForm(UserCreationForm):
    email = forms.EmailField(widget=forms.EmailInput(attrs={'class': 'input'}))
    full_name = forms.CharField(
        required=False,
        max_length=150,
        widget=forms.TextInput(attrs={'class': 'input'}),
    )

    class Meta(UserCreationForm.Meta):
        model = get_user_model()
        fields = ('username', 'email')

    def save(self, commit=True):
        user = super().save(commit=False)
        user.email = self.cleaned_data['email']
        # Signup metadata, read by the provisioning receiver
        user._signup_full_name = self.cleaned_data.get('full_name') or None
        if commit:
            user.save()
        return user
