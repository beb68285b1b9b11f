from django.core.management.base import BaseCommand, CommandError

from apps.core.domain.exceptions import DomainError
from apps.core.domain.dates import parse_iso_date
from apps.core.services import SettingsService
from apps.habits.models import Habit, HabitEntry
from apps.habits.services import HabitService


class Command(BaseCommand):
    help = 'Uzupełnia brakujące wpisy nawyków z minionych dni (domyślnie statusem "missed")'

    def add_arguments(self, parser):
        parser.add_argument('--start', help='Data początkowa YYYY-MM-DD (domyślnie 30 dni temu)')
        parser.add_argument('--status', default=HabitEntry.Status.MISSED,
                            choices=HabitEntry.Status.values)

    def handle(self, *args, **options):
        service = HabitService()
        today = SettingsService().effective_today()

        try:
            start = parse_iso_date(options['start']) if options['start'] else service.default_auto_fill_start(None, today)
            report = service.auto_fill_missed(Habit.objects.filter(is_deleted=False), start, today, options['status'])
        except DomainError as e:
            raise CommandError(e.message)

        self.stdout.write(self.style.SUCCESS(
            f"Uzupełniono {report['filled']} wpisów ({report['habitsProcessed']} nawyków, "
            f"{start.isoformat()} - {today.isoformat()})."
        ))
