# performance/management/commands/populate_kra_snapshots.py

from django.core.management.base import BaseCommand, CommandError

from base.company_context import company_scope
from performance.models import AppraisalParticipant
from performance.services.kra_snapshots import populate_kra_snapshots, populate_participants_for_job


class Command(BaseCommand):
    help = "Create missing KRA snapshots for one participant, or for every active participant of a job."

    def add_arguments(self, parser):
        parser.add_argument("--company-id", type=int, required=True)
        target = parser.add_mutually_exclusive_group(required=True)
        target.add_argument("--participant-id", type=int)
        target.add_argument("--job-id", type=int)

    def handle(self, *args, **options):
        company_id = options["company_id"]

        # الأمر يعمل داخل سياق الشركة: objects يرى سجلات --company-id فقط
        with company_scope(company_id):
            if options["participant_id"]:
                participant = AppraisalParticipant.objects.filter(pk=options["participant_id"]).first()
                if participant is None:
                    raise CommandError(f"Participant {options['participant_id']} not found in company {company_id}.")
                results = {participant.id: populate_kra_snapshots(participant.id, participant.job_id, company_id)}
            else:
                results = populate_participants_for_job(options["job_id"], company_id)
                self.stdout.write(f"Populating KRA snapshots for {len(results)} participant(s) ...")

        failed = 0
        for pid, result in results.items():
            if result.error:
                failed += 1
                self.stderr.write(f"- participant #{pid}: {result.error}")
            else:
                self.stdout.write(f"- participant #{pid}: {result.populated} new, {result.skipped} existing")

        if failed:
            raise CommandError(f"{failed} participant(s) failed.")
        self.stdout.write(self.style.SUCCESS("Done populating KRA snapshots."))
