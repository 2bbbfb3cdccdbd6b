from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('chefs', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='CustomerContact',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('name', models.CharField(blank=True, max_length=200)),
                ('email_hash', models.CharField(max_length=64, unique=True)),
                ('marketing_opt_in', models.BooleanField(default=False)),
                ('consent_timestamp', models.DateTimeField(blank=True, null=True)),
                ('consent_source', models.CharField(choices=[('contact_form', 'Contact form'), ('newsletter_signup', 'Newsletter signup'), ('admin_import', 'Admin import')], default='contact_form', max_length=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='CustomerInquiry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('service_type', models.CharField(choices=[('weekly_cooking', 'Weekly home cooking'), ('special_event', 'Special event catering'), ('one_time', 'One-time cooking service'), ('other', 'Cooking services')], max_length=20)),
                ('budget_range', models.CharField(blank=True, choices=[('under_30', 'Under £30'), ('30_50', '£30-50'), ('50_80', '£50-80'), ('80_100', '£80-100'), ('100_plus', '£100+')], max_length=20)),
                ('message', models.CharField(blank=True, max_length=500)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('contacted', 'Contacted'), ('converted', 'Converted'), ('closed', 'Closed')], default='pending', max_length=20)),
                ('ip_hash', models.CharField(db_index=True, max_length=64)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('chef', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inquiries', to='chefs.chef')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inquiries', to='crm.customercontact')),
            ],
            options={
                'verbose_name_plural': 'Customer inquiries',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='customerinquiry',
            constraint=models.UniqueConstraint(fields=('chef', 'customer'), name='unique_inquiry_per_chef_customer'),
        ),
        migrations.CreateModel(
            name='ContactClickEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('source', models.CharField(choices=[('cta_button', 'CTA button'), ('modal_submit', 'Modal submit'), ('skip_form', 'Skip form')], max_length=20)),
                ('user_agent', models.CharField(blank=True, max_length=255)),
                ('referrer', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('chef', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='contact_clicks', to='chefs.chef')),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
    ]
