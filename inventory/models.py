from django.db import models


class StorageEntry(models.Model):
    """One serialized JSON collection per key (menu, activeOrders, ...)."""

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True, default="")

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.key} ({len(self.value)} bytes)"
