# inventory/tasks.py
import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def restock_recipients():
    """Kitchen addresses from RESTOCK_ALERT_EMAILS, blanks and repeats dropped."""
    emails = getattr(settings, "RESTOCK_ALERT_EMAILS", None) or []
    if isinstance(emails, str):
        emails = emails.split(",")
    return sorted({e.strip() for e in emails if e and e.strip()})


def restock_message(items):
    lines = [f"- {i['name']}: {i['quantity']} left ({i['status']})" for i in items]
    return "These menu items are running low:\n" + "\n".join(lines)


@shared_task
def send_restock_alert(items):
    """
    Email the kitchen about items that need restocking.

    `items` is a list of {"name", "quantity", "status"} dicts.
    """
    if not items:
        return "Nothing to report"

    recipients = restock_recipients()
    if not recipients:
        logger.info("Restock alert for %d item(s) had no recipients", len(items))
        return "No recipients"

    send_mail(
        f"Restock needed: {len(items)} item(s)",
        restock_message(items),
        getattr(settings, "DEFAULT_FROM_EMAIL", None),
        recipients,
        fail_silently=False,
    )
    return f"Reported {len(items)} items"
