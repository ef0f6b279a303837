"""Web UI URL configuration."""
from __future__ import annotations

from django.urls import path

from skycast.web.views import DismissErrorView, IndexView, SearchView

urlpatterns = [
    path("", IndexView.as_view(), name="index"),
    path("search", SearchView.as_view(), name="search"),
    path("dismiss", DismissErrorView.as_view(), name="dismiss"),
]
