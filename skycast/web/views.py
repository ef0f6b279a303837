"""Single-page weather lookup UI."""
from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from django.shortcuts import redirect, render
from django.views import View

from skycast.api.views import get_geolocation_provider, get_weather_resolver
from skycast.core.services import QueryOrchestrator
from skycast.core.theme import background_class
from skycast.web.session import SessionStateStore


logger = logging.getLogger(__name__)


def _client_ip(request) -> str | None:
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


class LookupMixin:
    """Build an orchestrator around the state stored in the session."""

    def get_orchestrator(self, request, store: SessionStateStore) -> QueryOrchestrator:
        orchestrator = QueryOrchestrator(
            get_weather_resolver(),
            get_geolocation_provider(_client_ip(request)),
            state=store.load(),
        )
        orchestrator.subscribe(store.save)
        return orchestrator


class IndexView(LookupMixin, View):
    template_name = "skycast/index.html"

    def get(self, request):
        store = SessionStateStore(request.session)
        if not store.started:
            orchestrator = self.get_orchestrator(request, store)
            store.mark_started()
            logger.info("Starting session with a location lookup")
            async_to_sync(orchestrator.start)()
        state = store.load()
        context = {
            "state": state,
            "weather": state.weather,
            "query": store.query,
            "theme": background_class(state.weather),
        }
        return render(request, self.template_name, context)


class SearchView(LookupMixin, View):
    def post(self, request):
        store = SessionStateStore(request.session)
        text = request.POST.get("q", "")
        store.query = text
        # A search is the first interaction; the startup lookup never follows it.
        store.mark_started()
        if text.strip():
            async_to_sync(self.get_orchestrator(request, store).submit_query)(text)
        return redirect("index")


class DismissErrorView(LookupMixin, View):
    def post(self, request):
        store = SessionStateStore(request.session)
        self.get_orchestrator(request, store).dismiss_error()
        return redirect("index")
