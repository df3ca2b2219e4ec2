from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError

from offers.models import Offer
from offers.services import create_full_offer
from tasks.models import SubTask, Task

DEMO_NAME = "Content Creator Accelerator"
DEMO_TAG = "demo"

PROBLEMS = [
    {
        "id": "p1",
        "title": "Spending hours creating content that gets zero engagement",
        "emotional_hook": "Wasting time while competitors steal your audience",
    },
    {
        "id": "p2",
        "title": "Struggling to come up with fresh content ideas consistently",
        "emotional_hook": "Feeling stuck and uninspired every single day",
    },
]

PRODUCTS = [
    {"name": "The 30-Day Content Calendar", "value": Decimal("197"), "delivery_format": "template", "problem_id": "p2"},
    {"name": "Engagement Accelerator Video Series", "value": Decimal("297"), "delivery_format": "video series", "problem_id": "p1"},
    {"name": "Content-to-Cash Checklist", "value": Decimal("97"), "delivery_format": "checklist", "is_bonus": True},
    {"name": "Trend Radar Swipe File", "value": Decimal("67"), "delivery_format": "toolkit", "is_bonus": True},
]

TASKS = [
    ("Create product outline and structure", Task.Priority.HIGH, ["Research competitor products", "Create module list"]),
    ("Produce the core content", Task.Priority.MEDIUM, ["Draft the content", "Review and edit", "Finalize assets"]),
]


class Command(BaseCommand):
    help = "Create or reset a demo offer with problems, products, bonuses, tasks and subtasks."

    def handle(self, *args, **options):
        # only offers created by this command carry the demo tag
        demo_ids = [
            pk for pk, tags in Offer.objects.filter(name=DEMO_NAME).values_list("id", "tags") if DEMO_TAG in (tags or [])
        ]
        deleted, _ = Offer.objects.filter(pk__in=demo_ids).delete()
        if deleted:
            self.stdout.write(f"Removed existing demo offer '{DEMO_NAME}'")

        result = create_full_offer(
            {
                "name": DEMO_NAME,
                "topic": "Content marketing",
                "description": "Everything a solo creator needs to publish content that sells.",
                "tags": ["content", DEMO_TAG],
                "price": Decimal("47"),
                "problems": [dict(p) for p in PROBLEMS],
                "products": [dict(p) for p in PRODUCTS],
            }
        )
        if not result.success:
            raise CommandError(f"Could not create demo offer: {result.error}")
        offer = result.payload

        for product in offer.products.filter(is_bonus=False):
            for title, priority, checklist in TASKS:
                task = Task.objects.create(product=product, title=title, priority=priority)
                for position, item in enumerate(checklist):
                    SubTask.objects.create(task=task, title=item, order=position)

        self.stdout.write(self.style.SUCCESS(f"Created demo offer #{offer.pk} '{offer.name}'"))
        self.stdout.write(f"  → total_value={offer.total_value}, price={offer.price}")
        self.stdout.write(self.style.SUCCESS("Demo offer ready."))
