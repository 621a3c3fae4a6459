from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ContactMessage",
            fields=[
                ("id",         models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name",       models.CharField(max_length=120)),
                ("email",      models.EmailField(max_length=254)),
                ("phone",      models.CharField(blank=True, max_length=30)),
                ("subject",    models.CharField(blank=True, max_length=200)),
                ("message",    models.TextField()),
                ("notified",   models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="PartnershipInquiry",
            fields=[
                ("id",                   models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("org_name",             models.CharField(max_length=200)),
                ("org_type",             models.CharField(max_length=100)),
                ("org_size",             models.CharField(blank=True, max_length=50)),
                ("contact_person",       models.CharField(max_length=120)),
                ("contact_email",        models.EmailField(max_length=254)),
                ("contact_phone",        models.CharField(blank=True, max_length=30)),
                ("partnership_interest", models.CharField(max_length=200)),
                ("partnership_goals",    models.TextField(blank=True)),
                ("available_resources",  models.TextField(blank=True)),
                ("timeline",             models.CharField(blank=True, max_length=100)),
                ("additional_info",      models.TextField(blank=True)),
                ("notified",             models.BooleanField(default=False)),
                ("created_at",           models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "verbose_name_plural": "partnership inquiries",
            },
        ),
        migrations.CreateModel(
            name="WorkshopRegistration",
            fields=[
                ("id",                models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name",         models.CharField(max_length=120)),
                ("email",             models.EmailField(max_length=254)),
                ("phone",             models.CharField(max_length=30)),
                ("workshop",          models.CharField(blank=True, max_length=200)),
                ("organization",      models.CharField(blank=True, max_length=200)),
                ("message",           models.TextField(blank=True)),
                ("payload",           models.JSONField(blank=True, default=dict)),
                ("workflow_status",   models.CharField(
                    choices=[("pending", "Pending"), ("delivered", "Delivered"), ("failed", "Failed")],
                    default="pending",
                    max_length=10,
                )),
                ("workflow_attempts", models.PositiveSmallIntegerField(default=0)),
                ("created_at",        models.DateTimeField(auto_now_add=True)),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.AddIndex(
            model_name="workshopregistration",
            index=models.Index(fields=["workflow_status"], name="reg_workflow_idx"),
        ),
    ]
