import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("base", "0001_initial"),
        ("hr", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AppraisalParticipant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("cycle_name", models.CharField(max_length=255)),
                ("date_start", models.DateField()),
                ("date_end", models.DateField()),
                ("status", models.CharField(choices=[("active", "Active"), ("finalized", "Finalized")], db_index=True, default="active", max_length=12)),
                ("responsibility_score", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ("finalized_at", models.DateTimeField(blank=True, null=True)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="performance_appraisalparticipant_set", to="base.company")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appraisalparticipant_created", to=settings.AUTH_USER_MODEL)),
                ("updated_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appraisalparticipant_updated", to=settings.AUTH_USER_MODEL)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="appraisal_participations", to="hr.employee")),
                ("evaluator", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appraisals_to_review", to="hr.employee")),
                ("job", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="appraisal_participants", to="hr.job")),
            ],
            options={
                "db_table": "perf_appraisal_participant",
                "permissions": [
                    ("self_rate_participant", "Can submit self ratings for participant"),
                    ("manager_rate_participant", "Can submit manager ratings for participant"),
                ],
                "indexes": [models.Index(fields=["company", "job", "status"], name="perf_part_company_job_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("date_start__lte", models.F("date_end"))), name="chk_participant_dates"),
                    models.UniqueConstraint(fields=("employee", "cycle_name"), name="uniq_participant_employee_cycle"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AppraisalKRASnapshot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("snapshot_key", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("target_metric", models.CharField(blank=True, max_length=255)),
                ("measurement_method", models.CharField(blank=True, max_length=255)),
                ("weight", models.PositiveSmallIntegerField(default=0)),
                ("sequence_order", models.PositiveIntegerField(default=0)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("self_rated", "Self Rated"), ("manager_rated", "Manager Rated"), ("completed", "Completed")], db_index=True, default="pending", max_length=16)),
                ("self_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("self_comments", models.TextField(blank=True)),
                ("self_rated_at", models.DateTimeField(blank=True, null=True)),
                ("manager_rating", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("manager_comments", models.TextField(blank=True)),
                ("manager_rated_at", models.DateTimeField(blank=True, null=True)),
                ("calculated_score", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ("final_score", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ("weight_adjusted_score", models.DecimalField(blank=True, decimal_places=4, max_digits=8, null=True)),
                ("evidence_urls", models.JSONField(blank=True, default=list)),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="performance_appraisalkrasnapshot_set", to="base.company")),
                ("participant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="kra_snapshots", to="performance.appraisalparticipant")),
                ("responsibility", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="appraisal_kra_snapshots", to="hr.responsibility")),
                ("source_kra", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appraisal_snapshots", to="hr.responsibilitykra")),
                ("job_kra", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="appraisal_snapshots", to="hr.jobresponsibilitykra")),
                ("manager", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="kra_ratings_given", to="hr.employee")),
            ],
            options={
                "db_table": "perf_appraisal_kra_snapshot",
                "ordering": ["participant", "responsibility", "sequence_order", "id"],
                "indexes": [models.Index(fields=["participant", "responsibility"], name="perf_snap_part_resp_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("participant", "snapshot_key"), name="uniq_snapshot_participant_key"),
                    models.CheckConstraint(condition=models.Q(("weight__lte", 100)), name="chk_snapshot_weight_0_100"),
                ],
            },
        ),
    ]
