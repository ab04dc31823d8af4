"""Tests for client view state transitions and rendering."""

import pytest

from client import state as st
from client.state import Cocktail, ExternalUrl, UploadedPath, ViewState
from client.view import render_cards, render_page

HOT_TODDY = Cocktail(
    id="a1",
    name="Hot Toddy",
    ingredients="Wodka, Peat Moss",
    recipe="Take your ingredients, mix, serve",
    comment="Warms you up",
)
GIN_FIZZ = Cocktail(
    id="b2",
    name="Gin Fizz",
    ingredients="Gin, Soda",
    recipe="Build over ice",
    image="/uploads/gin_fizz-1700000000000.png",
)
PALOMA = Cocktail(
    id="c3",
    name="Paloma",
    ingredients="Tequila, Grapefruit soda",
    recipe="Build over ice",
    image="https://example.com/paloma.jpg",
    comment="Best with a salt rim",
)
RECORDS = (HOT_TODDY, GIN_FIZZ, PALOMA)


@pytest.fixture
def loaded():
    return st.with_records(ViewState(), RECORDS)


def test_render_is_pure():
    first = render_cards(RECORDS, "ice", "b2")
    second = render_cards(RECORDS, "ice", "b2")
    assert first == second


def test_toggle_then_other_card_leaves_only_second_expanded(loaded):
    state = st.toggle_expand(loaded, "a1")
    state = st.toggle_expand(state, "b2")
    assert state.expanded_id == "b2"

    html = render_cards(state.records, state.search, state.expanded_id)
    assert html.count("cocktail-card expanded") == 1
    assert 'class="cocktail-card expanded" data-id="b2"' in html


def test_toggle_same_card_collapses(loaded):
    state = st.toggle_expand(loaded, "a1")
    state = st.toggle_expand(state, "a1")
    assert state.expanded_id is None


def test_collapse_always_clears(loaded):
    assert st.collapse(loaded).expanded_id is None
    assert st.collapse(st.toggle_expand(loaded, "c3")).expanded_id is None


def test_toggle_unknown_id_does_not_expand(loaded):
    assert st.toggle_expand(loaded, "missing").expanded_id is None


def test_search_is_literal_case_insensitive_substring():
    # "vodka" is not a substring of "Wodka"
    assert st.filter_records(RECORDS, "vodka") == ()
    assert st.filter_records(RECORDS, "WODKA") == (HOT_TODDY,)
    assert st.filter_records(RECORDS, "  gin ") == (GIN_FIZZ,)


def test_search_checks_recipe_and_comment():
    assert st.filter_records(RECORDS, "over ice") == (GIN_FIZZ, PALOMA)
    assert st.filter_records(RECORDS, "salt rim") == (PALOMA,)


def test_empty_search_shows_all():
    assert st.filter_records(RECORDS, "") == RECORDS
    assert st.filter_records(RECORDS, "   ") == RECORDS


def test_search_keeps_records_and_expanded_selector(loaded):
    state = st.toggle_expand(loaded, "a1")
    state = st.set_search(state, "gin")
    assert state.records == RECORDS
    assert state.expanded_id == "a1"

    html = render_cards(state.records, state.search, state.expanded_id)
    assert "Hot Toddy" not in html
    assert "Gin Fizz" in html
    assert "cocktail-card expanded" not in html


def test_render_escapes_record_text():
    evil = Cocktail(id="x", name="<script>alert(1)</script>", ingredients="a", recipe="b")
    html = render_cards((evil,), "", "x")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_empty_shows_no_cocktails():
    html = render_cards(RECORDS, "nothing matches this")
    assert "No cocktails found." in html
    assert "cocktail-card" not in html


def test_expanded_card_shows_details_and_comment_only_when_present():
    html = render_cards(RECORDS, "", "b2")
    assert "Build over ice" in html
    assert "cocktail-comment" not in html

    html = render_cards(RECORDS, "", "c3")
    assert "Best with a salt rim" in html


def test_with_records_prunes_dangling_selectors(loaded):
    state = st.toggle_expand(loaded, "a1")
    state = st.request_delete(state, "a1")
    state = st.begin_edit(state, "a1")

    state = st.with_records(state, (GIN_FIZZ, PALOMA))
    assert state.expanded_id is None
    assert state.delete_target is None
    assert not state.form.is_editing


def test_begin_edit_copies_record_and_picks_image_source(loaded):
    state = st.begin_edit(loaded, "b2")
    assert state.form.is_editing
    assert state.form.name == "Gin Fizz"
    assert state.form.image == UploadedPath("/uploads/gin_fizz-1700000000000.png")

    state = st.begin_edit(loaded, "c3")
    assert state.form.image == ExternalUrl("https://example.com/paloma.jpg")
    assert state.form.comment == "Best with a salt rim"

    state = st.begin_edit(loaded, "a1")
    assert state.form.image == ExternalUrl("")
    assert state.form.to_payload()["theJpeg"] is None


def test_begin_edit_unknown_id_is_ignored(loaded):
    assert st.begin_edit(loaded, "missing") is loaded


def test_reset_form_returns_to_create_mode(loaded):
    state = st.reset_form(st.begin_edit(loaded, "c3"))
    assert state.form == st.FormState()
    assert state.records == RECORDS


def test_switching_image_source_drops_previous_value(loaded):
    state = st.begin_edit(loaded, "c3")
    state = st.choose_image_source(state, "upload")
    assert state.form.image == UploadedPath()
    assert state.form.to_payload()["theJpeg"] is None

    state = st.set_image(state, UploadedPath("/uploads/new-1.png"))
    state = st.choose_image_source(state, "upload")
    assert state.form.image == UploadedPath("/uploads/new-1.png")

    state = st.choose_image_source(state, "url")
    assert state.form.image == ExternalUrl()


def test_choose_unknown_image_source(loaded):
    with pytest.raises(ValueError):
        st.choose_image_source(loaded, "camera")


def test_request_delete_carries_id_and_name(loaded):
    state = st.request_delete(loaded, "c3")
    assert state.delete_target == st.DeleteTarget("c3", "Paloma")
    assert st.clear_delete_target(state).delete_target is None


def test_notice_expires_after_five_seconds(loaded):
    state = st.notify(loaded, "Saved", "success", now=100.0)
    assert state.active_notice(104.9).message == "Saved"
    assert state.active_notice(105.0) is None

    state = st.notify(state, "Broken", "error", now=101.0)
    assert state.notice.message == "Broken"


def test_render_page_shows_form_notice_and_modal(loaded):
    state = st.begin_edit(loaded, "c3")
    state = st.request_delete(state, "a1")
    state = st.notify(state, "Cocktail updated successfully!", "success", now=0.0)

    html = render_page(state, now=1.0)
    assert "Edit Cocktail" in html
    assert 'value="https://example.com/paloma.jpg"' in html
    assert "Cocktail updated successfully!" in html
    assert 'id="delete-cocktail-name">Hot Toddy<' in html

    html = render_page(st.reset_form(loaded), now=10.0)
    assert "Add New Cocktail" in html
    assert 'id="modal"' not in html
    assert "message success" not in html


def test_layout_switch_changes_grid_class(loaded):
    state = st.set_layout(loaded, "oblique")
    assert state.layout == "oblique"
    assert 'class="cocktails-grid oblique"' in render_cards(state.records, layout=state.layout)

    with pytest.raises(ValueError):
        st.set_layout(loaded, "carousel")


def test_lightbox_opens_only_for_records_with_image(loaded):
    assert st.open_image(loaded, "a1") is loaded

    state = st.open_image(loaded, "c3")
    assert state.lightbox_id == "c3"
    assert 'id="image-modal-img" src="https://example.com/paloma.jpg"' in render_page(state, now=0.0)

    assert st.close_image(state).lightbox_id is None
    assert st.with_records(state, (HOT_TODDY,)).lightbox_id is None
