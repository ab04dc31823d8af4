from pathlib import Path
from typing import Dict, Iterable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from client.state import LAYOUTS, Cocktail, ExternalUrl, ViewState, filter_records

TEMPLATES = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(),
)


def _query(search: str, expanded_id: Optional[str], layout: str) -> Dict[str, str]:
    # base query string every link on the page starts from
    return {"q": search or "", "expanded": expanded_id or "", "view": layout}


def render_cards(
    records: Iterable[Cocktail],
    search: str = "",
    expanded_id: Optional[str] = None,
    layout: str = "grid",
) -> str:
    """Render the card list from the full record set, filter text and expanded id.

    Only these inputs are read. An expanded id that the filter hides has no
    visible effect.
    """
    return TEMPLATES.get_template("cards.html").render(
        cocktails=filter_records(records, search),
        expanded_id=expanded_id,
        layout=layout,
        query=_query(search, expanded_id, layout),
    )


def render_page(
    state: ViewState,
    now: float,
    *,
    show_form: bool = True,
    title: str = "Cocktail Book",
) -> str:
    form = state.form
    lightbox = state.find(state.lightbox_id) if state.lightbox_id else None
    return TEMPLATES.get_template("page.html").render(
        title=title,
        notice=state.active_notice(now),
        search=state.search,
        expanded_id=state.expanded_id,
        layout=state.layout,
        layouts=LAYOUTS,
        query=_query(state.search, state.expanded_id, state.layout),
        cocktails=filter_records(state.records, state.search),
        show_form=show_form,
        form=form,
        image_kind="url" if isinstance(form.image, ExternalUrl) else "upload",
        delete_target=state.delete_target,
        lightbox=lightbox,
    )
