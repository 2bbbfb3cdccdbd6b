from django.db import migrations


DEFAULT_QUESTIONS = [
    # (field_key, label, field_type, is_required, hint_text)
    ('full_name', 'Full Name', 'text', True, ''),
    ('email', 'Email Address', 'email', True, ''),
    ('phone', 'Phone Number', 'phone', True, 'Customers need to contact you for bookings'),
    ('location', 'Location', 'text', True, 'Town or area you cook in'),
    ('bio', 'Bio/About You', 'textarea', True, 'Tell customers about your cooking experience and what makes your food special'),
    ('best_dishes', 'Best Dishes', 'textarea', True, 'List your signature dishes that customers love (e.g., Butter Chicken, Biryani, Samosas)'),
    ('hourly_rate', 'Hourly Rate (£)', 'number', True, 'Set a competitive rate - customers often book based on value'),
    ('experience_years', 'Experience Years', 'number', False, ''),
    ('languages', 'Languages Spoken', 'text', False, ''),
    ('availability', 'Availability', 'text', False, ''),
    ('frequency_preference', 'Frequency Preference', 'text', False, ''),
    ('dietary_specialties', 'Dietary Specialties', 'text', False, ''),
    ('special_events', 'Special Events', 'textarea', False, ''),
    ('house_help_services', 'House Help Services', 'textarea', False, ''),
    ('travel_distance', 'Travel Distance', 'number', False, ''),
    ('minimum_booking', 'Minimum Booking', 'number', False, ''),
    ('profile_photo', 'Profile Photo', 'photo', False, 'Your best photo helps customers choose you - show your personality!'),
    ('food_photos', 'Food Photos', 'photo', False, 'Beautiful food photos attract more customers - showcase your best dishes!'),
    ('introduction_video', 'Introduction Video', 'video', False, ''),
]


def add_default_questions(apps, schema_editor):
    ChefQuestion = apps.get_model('applications', 'ChefQuestion')
    for order, (key, label, field_type, required, hint) in enumerate(DEFAULT_QUESTIONS, start=1):
        ChefQuestion.objects.get_or_create(
            field_key=key,
            defaults={
                'label': label,
                'field_type': field_type,
                'is_required': required,
                'hint_text': hint,
                'display_order': order,
                'min_value': 0 if field_type == 'number' else None,
            },
        )


def remove_default_questions(apps, schema_editor):
    ChefQuestion = apps.get_model('applications', 'ChefQuestion')
    ChefQuestion.objects.filter(field_key__in=[q[0] for q in DEFAULT_QUESTIONS]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('applications', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(add_default_questions, remove_default_questions),
    ]
