import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("base", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Job",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("active", models.BooleanField(default=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("sequence", models.IntegerField(default=10)),
                ("description", models.TextField(blank=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="hr_job_set", to="base.company")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="job_created", to=settings.AUTH_USER_MODEL)),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="job_updated", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "hr_job",
                "indexes": [models.Index(fields=["company", "active"], name="hr_job_company_active_idx")],
                "constraints": [models.UniqueConstraint(fields=("name", "company"), name="uniq_job_name_company")],
            },
        ),
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("work_email", models.EmailField(blank=True, max_length=254)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="hr_employee_set", to="base.company")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employee_created", to=settings.AUTH_USER_MODEL)),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employee_updated", to=settings.AUTH_USER_MODEL)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employees", to=settings.AUTH_USER_MODEL)),
                ("job", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employee_set", to="hr.job")),
                ("manager", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="managed_employees", to="hr.employee")),
            ],
            options={
                "db_table": "hr_employee",
                "indexes": [models.Index(fields=["company", "active"], name="hr_employee_company_active_idx")],
            },
        ),
        migrations.CreateModel(
            name="Responsibility",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("description", models.TextField(blank=True)),
                ("category", models.CharField(blank=True, max_length=64)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="hr_responsibility_set", to="base.company")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="responsibility_created", to=settings.AUTH_USER_MODEL)),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="responsibility_updated", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "responsibilities",
                "ordering": ["name"],
                "constraints": [models.UniqueConstraint(fields=("company", "name"), name="uniq_responsibility_company_name")],
            },
        ),
        migrations.CreateModel(
            name="ResponsibilityKRA",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("target_metric", models.CharField(blank=True, max_length=255)),
                ("measurement_method", models.CharField(blank=True, max_length=255)),
                ("weight", models.PositiveSmallIntegerField(default=0, help_text="0..100 share of the responsibility")),
                ("sequence_order", models.PositiveIntegerField(blank=True, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="hr_responsibilitykra_set", to="base.company")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="responsibilitykra_created", to=settings.AUTH_USER_MODEL)),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="responsibilitykra_updated", to=settings.AUTH_USER_MODEL)),
                ("responsibility", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="kras", to="hr.responsibility")),
            ],
            options={
                "db_table": "responsibility_kras",
                "ordering": ["responsibility", "id"],
                "indexes": [models.Index(fields=["company", "responsibility", "is_active"], name="resp_kra_company_resp_idx")],
                "constraints": [models.CheckConstraint(condition=models.Q(("weight__lte", 100)), name="chk_resp_kra_weight_0_100")],
            },
        ),
        migrations.CreateModel(
            name="JobResponsibility",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("weighting", models.PositiveSmallIntegerField(default=0, help_text="0..100 share of the job")),
                ("assessment_mode", models.CharField(choices=[("auto", "Auto"), ("kra_based", "KRA Based"), ("hybrid", "Hybrid"), ("responsibility_only", "Responsibility Only")], default="auto", max_length=24)),
                ("start_date", models.DateField(default=django.utils.timezone.localdate)),
                ("end_date", models.DateField(blank=True, db_index=True, null=True)),
                ("notes", models.TextField(blank=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="hr_jobresponsibility_set", to="base.company")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="jobresponsibility_created", to=settings.AUTH_USER_MODEL)),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="jobresponsibility_updated", to=settings.AUTH_USER_MODEL)),
                ("job", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="job_responsibilities", to="hr.job")),
                ("responsibility", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="job_links", to="hr.responsibility")),
            ],
            options={
                "db_table": "job_responsibilities",
                "ordering": ["job", "id"],
                "indexes": [models.Index(fields=["company", "job", "end_date"], name="job_resp_company_job_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("weighting__lte", 100)), name="chk_job_resp_weighting_0_100"),
                    models.UniqueConstraint(condition=models.Q(("end_date__isnull", True)), fields=("job", "responsibility"), name="uniq_effective_job_responsibility"),
                ],
            },
        ),
        migrations.CreateModel(
            name="JobResponsibilityKRA",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("name", models.CharField(blank=True, max_length=255)),
                ("description", models.TextField(blank=True)),
                ("job_specific_target", models.CharField(blank=True, max_length=255)),
                ("measurement_method", models.CharField(blank=True, max_length=255)),
                ("weight", models.PositiveSmallIntegerField(default=0, help_text="0..100 share of the responsibility")),
                ("sequence_order", models.PositiveIntegerField(blank=True, null=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="hr_jobresponsibilitykra_set", to="base.company")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="jobresponsibilitykra_created", to=settings.AUTH_USER_MODEL)),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="jobresponsibilitykra_updated", to=settings.AUTH_USER_MODEL)),
                ("job_responsibility", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="kras", to="hr.jobresponsibility")),
                ("responsibility_kra", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="job_overrides", to="hr.responsibilitykra")),
            ],
            options={
                "db_table": "job_responsibility_kras",
                "ordering": ["job_responsibility", "id"],
                "indexes": [models.Index(fields=["company", "job_responsibility"], name="job_kra_company_jr_idx")],
                "constraints": [models.CheckConstraint(condition=models.Q(("weight__lte", 100)), name="chk_job_kra_weight_0_100")],
            },
        ),
    ]
