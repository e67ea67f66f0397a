"""Pure functions from controller state to view models."""

from models.country import CountryDetail, CountrySummary
from models.state import DetailState, DirectoryState
from models.views import AppView, CountryCard, DetailInfo, DetailView, DirectoryView
from services.detail_session import DetailSession
from services.directory_store import DirectoryStore
from services.navigation import NavigationController
from utils.formatting import (
    flag_alt_text,
    format_population,
    join_capitals,
    join_currencies,
    join_languages,
)


def country_card(country: CountrySummary) -> CountryCard:
    return CountryCard(
        id=country.id,
        name=country.common_name,
        flag_src=country.flag_image_ref,
        flag_alt=flag_alt_text(country),
    )


def detail_info(detail: CountryDetail) -> DetailInfo:
    return DetailInfo(
        id=detail.id,
        name=detail.common_name,
        official_name=detail.official_name,
        flag_src=detail.flag_image_ref,
        flag_alt=flag_alt_text(detail),
        capital=join_capitals(detail),
        population=format_population(detail.population),
        region=detail.region,
        subregion=detail.subregion,
        currencies=join_currencies(detail),
        languages=join_languages(detail),
    )


def directory_view(store: DirectoryStore) -> DirectoryView:
    state: DirectoryState = store.state
    return DirectoryView(
        phase=state.phase,
        error_message=state.error_message,
        filter_text=state.filter_text,
        total=len(state.entries),
        countries=[country_card(c) for c in store.visible_entries()],
    )


def detail_view(session: DetailSession | None) -> DetailView:
    state = session.state if session is not None else DetailState()
    return DetailView(
        phase=state.phase,
        selected=state.selected_id,
        error_message=state.error_message,
        country=detail_info(state.detail) if state.detail else None,
    )


def app_view(controller: NavigationController) -> AppView:
    if controller.mode.is_detail:
        return AppView(mode=controller.mode.mode, detail=detail_view(controller.session))
    return AppView(mode=controller.mode.mode, directory=directory_view(controller.directory))
