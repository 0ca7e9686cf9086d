# performance/management/commands/validate_job_weights.py

from django.core.management.base import BaseCommand, CommandError

from performance.exceptions import JobNotFound
from performance.services.weights import validate_company_jobs, validate_job_weights


class Command(BaseCommand):
    help = "Report responsibility and KRA weight totals for the jobs of a company."

    def add_arguments(self, parser):
        parser.add_argument("--company-id", type=int, required=True)
        parser.add_argument("--job-id", type=int)

    def handle(self, *args, **options):
        company_id = options["company_id"]
        if options["job_id"]:
            try:
                reports = [validate_job_weights(options["job_id"], company_id)]
            except JobNotFound as exc:
                raise CommandError(str(exc))
        else:
            reports = validate_company_jobs(company_id)

        styles = {"valid": self.style.SUCCESS, "warning": self.style.WARNING, "error": self.style.ERROR}
        for report in reports:
            line = f"Job #{report.job_id}: {report.status} (responsibilities {report.responsibility_weight_total}%)"
            self.stdout.write(styles[report.status](line))
            for issue in report.issues:
                self.stdout.write(f"  - {issue}")

        invalid = sum(1 for r in reports if r.status != "valid")
        self.stdout.write(f"{len(reports)} job(s) checked, {invalid} need attention.")
