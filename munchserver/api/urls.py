"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from munchserver.api.views import MeteoblueView, OpenMeteoView, health

urlpatterns = [
    path("", health, name="health"),
    path("open-meteo", OpenMeteoView.as_view(), name="open-meteo"),
    path("meteo", MeteoblueView.as_view(), name="meteoblue"),
]
