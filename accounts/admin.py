from __future__ import annotations

from django.contrib import admin

from .models import Address


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("user", "cep", "city", "state", "is_default", "local_area")
    list_filter = ("is_default", "state")
    search_fields = ("cep", "city", "street", "user__username", "user__email")
    raw_id_fields = ("user",)

    @admin.display(boolean=True, description="Local price")
    def local_area(self, obj):
        return obj.is_local_area()
