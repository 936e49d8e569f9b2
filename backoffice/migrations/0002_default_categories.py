"""
Seed the default menu categories.
"""

from django.db import migrations


DEFAULT_CATEGORIES = [
    ('Appetizers', 'Start your meal with our delicious appetizers', 1),
    ('Main Courses', 'Hearty and satisfying main dishes', 2),
    ('Desserts', 'Sweet endings to your perfect meal', 3),
    ('Drinks', 'Refreshing beverages and specialty drinks', 4),
]


def create_default_categories(apps, schema_editor):
    MenuCategory = apps.get_model('backoffice', 'MenuCategory')
    for name, description, display_order in DEFAULT_CATEGORIES:
        MenuCategory.objects.get_or_create(
            name=name,
            defaults={'description': description, 'display_order': display_order},
        )


def remove_default_categories(apps, schema_editor):
    MenuCategory = apps.get_model('backoffice', 'MenuCategory')
    MenuCategory.objects.filter(
        name__in=[name for name, _, _ in DEFAULT_CATEGORIES],
    ).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('backoffice', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_default_categories, remove_default_categories),
    ]
