from django.contrib import admin

from telepark.models import ParkingMeter


@admin.register(ParkingMeter)
class ParkingMeterAdmin(admin.ModelAdmin):
    list_display = ("meter_id", "status", "latitude", "longitude", "updated_at")
    list_filter = ("status",)
    search_fields = ("meter_id",)
    ordering = ("id",)
