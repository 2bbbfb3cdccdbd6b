from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import uuid


REVIEW_STATUS_CHOICES = [
    ('awaiting_email', 'Awaiting email verification'),
    ('published', 'Published'),
    ('spam', 'Spam'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('chefs', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Review',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('rating', models.PositiveSmallIntegerField(choices=[(1, '1'), (2, '2'), (3, '3'), (4, '4'), (5, '5')])),
                ('comment', models.CharField(blank=True, max_length=280)),
                ('email_hash', models.CharField(max_length=64)),
                ('ip_hash', models.CharField(db_index=True, max_length=64)),
                ('status', models.CharField(choices=REVIEW_STATUS_CHOICES, default='awaiting_email', max_length=20)),
                ('verification_token', models.CharField(blank=True, max_length=64, null=True, unique=True)),
                ('verification_expires_at', models.DateTimeField(blank=True, null=True)),
                ('trust_score', models.FloatField(default=0.0)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('verified_at', models.DateTimeField(blank=True, null=True)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('chef', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reviews', to='chefs.chef')),
            ],
            options={
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='review',
            constraint=models.UniqueConstraint(fields=('chef', 'email_hash'), name='unique_review_per_chef_email'),
        ),
        migrations.CreateModel(
            name='ReviewEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('from_status', models.CharField(blank=True, choices=REVIEW_STATUS_CHOICES, max_length=20, null=True)),
                ('to_status', models.CharField(choices=REVIEW_STATUS_CHOICES, max_length=20)),
                ('actor', models.CharField(choices=[('user', 'User'), ('admin', 'Admin'), ('system', 'System')], max_length=10)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('review', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='events', to='reviews.review')),
            ],
            options={
                'ordering': ['created_at', 'id'],
            },
        ),
    ]
