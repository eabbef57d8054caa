from django.urls import path

from telepark import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/meters", views.meters_view, name="meters"),
    path("api/v1/meters/nearest", views.nearest_meter_view, name="nearest-meter"),
    path("api/v1/meters/<str:meter_id>/status", views.meter_status_view, name="meter-status"),
    path("api/v1/meters/<str:meter_id>/move", views.meter_move_view, name="meter-move"),
]
