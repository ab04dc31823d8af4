"""Client view state.

Every snapshot is immutable: the transition functions below take a
``ViewState`` and return a new one, so a render is always a function of the
snapshot handed to it and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from core.uploads import is_uploaded_reference

NOTICE_SECONDS = 5.0
LAYOUTS = ("grid", "masonry", "oblique")


@dataclass(frozen=True)
class Cocktail:
    id: str
    name: str
    ingredients: str
    recipe: str
    image: Optional[str] = None
    comment: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Cocktail":
        return cls(
            id=str(data["_id"]),
            name=data["theCock"],
            ingredients=data["theIngredients"],
            recipe=data["theRecipe"],
            image=data.get("theJpeg"),
            comment=data.get("theComment"),
            created_at=data.get("created_at"),
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match; ``term`` must already be lowercased."""
        fields = [self.name, self.ingredients, self.recipe]
        if self.comment:
            fields.append(self.comment)
        return any(term in value.lower() for value in fields)


@dataclass(frozen=True)
class ExternalUrl:
    url: str = ""

    @property
    def reference(self) -> Optional[str]:
        return self.url.strip() or None


@dataclass(frozen=True)
class UploadedPath:
    path: Optional[str] = None

    @property
    def reference(self) -> Optional[str]:
        return self.path or None


ImageSource = Union[ExternalUrl, UploadedPath]


def image_source_for(reference: Optional[str]) -> ImageSource:
    """Pick the form's image source from a stored image reference."""
    if is_uploaded_reference(reference):
        return UploadedPath(reference)
    return ExternalUrl(reference or "")


@dataclass(frozen=True)
class FormState:
    editing_id: Optional[str] = None
    name: str = ""
    ingredients: str = ""
    recipe: str = ""
    comment: str = ""
    image: ImageSource = field(default_factory=ExternalUrl)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def to_payload(self) -> Dict[str, Optional[str]]:
        return {
            "theCock": self.name,
            "theIngredients": self.ingredients,
            "theRecipe": self.recipe,
            "theJpeg": self.image.reference,
            "theComment": self.comment or None,
        }


@dataclass(frozen=True)
class DeleteTarget:
    id: str
    name: str


@dataclass(frozen=True)
class Notice:
    message: str
    kind: str  # "success" or "error"
    expires_at: float


@dataclass(frozen=True)
class ViewState:
    records: Tuple[Cocktail, ...] = ()
    search: str = ""
    expanded_id: Optional[str] = None
    layout: str = "grid"
    lightbox_id: Optional[str] = None
    delete_target: Optional[DeleteTarget] = None
    form: FormState = field(default_factory=FormState)
    notice: Optional[Notice] = None
    loading: bool = False

    def find(self, cocktail_id: str) -> Optional[Cocktail]:
        return next((c for c in self.records if c.id == cocktail_id), None)

    def active_notice(self, now: float) -> Optional[Notice]:
        if self.notice and now < self.notice.expires_at:
            return self.notice
        return None


def filter_records(records: Iterable[Cocktail], search: str) -> Tuple[Cocktail, ...]:
    term = (search or "").strip().lower()
    if not term:
        return tuple(records)
    return tuple(c for c in records if c.matches(term))


# Transitions


def with_records(state: ViewState, records: Iterable[Cocktail]) -> ViewState:
    """Replace the record set, unsetting selectors that no longer resolve."""
    records = tuple(records)
    ids = {c.id for c in records}
    changes: Dict[str, Any] = {"records": records}
    if state.expanded_id not in ids:
        changes["expanded_id"] = None
    if state.lightbox_id not in ids:
        changes["lightbox_id"] = None
    if state.delete_target and state.delete_target.id not in ids:
        changes["delete_target"] = None
    if state.form.is_editing and state.form.editing_id not in ids:
        changes["form"] = FormState()
    return replace(state, **changes)


def toggle_expand(state: ViewState, cocktail_id: str) -> ViewState:
    if state.expanded_id == cocktail_id or state.find(cocktail_id) is None:
        return replace(state, expanded_id=None)
    return replace(state, expanded_id=cocktail_id)


def collapse(state: ViewState) -> ViewState:
    return replace(state, expanded_id=None)


def set_search(state: ViewState, search: str) -> ViewState:
    return replace(state, search=search)


def set_layout(state: ViewState, layout: str) -> ViewState:
    if layout not in LAYOUTS:
        raise ValueError(f"Unknown layout {layout!r}")
    return replace(state, layout=layout)


def open_image(state: ViewState, cocktail_id: str) -> ViewState:
    """Show a record's image enlarged; records without an image are ignored."""
    cocktail = state.find(cocktail_id)
    if cocktail is None or not cocktail.image:
        return state
    return replace(state, lightbox_id=cocktail.id)


def close_image(state: ViewState) -> ViewState:
    return replace(state, lightbox_id=None)


def begin_edit(state: ViewState, cocktail_id: str) -> ViewState:
    cocktail = state.find(cocktail_id)
    if cocktail is None:
        return state
    form = FormState(
        editing_id=cocktail.id,
        name=cocktail.name,
        ingredients=cocktail.ingredients,
        recipe=cocktail.recipe,
        comment=cocktail.comment or "",
        image=image_source_for(cocktail.image),
    )
    return replace(state, form=form)


def reset_form(state: ViewState) -> ViewState:
    return replace(state, form=FormState())


def update_form(state: ViewState, **fields: str) -> ViewState:
    return replace(state, form=replace(state.form, **fields))


def choose_image_source(state: ViewState, kind: str) -> ViewState:
    """Switch between "url" and "upload"; the value of the other source is dropped."""
    current = state.form.image
    if kind == "url":
        image = current if isinstance(current, ExternalUrl) else ExternalUrl()
    elif kind == "upload":
        image = current if isinstance(current, UploadedPath) else UploadedPath()
    else:
        raise ValueError(f"Unknown image source {kind!r}")
    return replace(state, form=replace(state.form, image=image))


def set_image(state: ViewState, image: ImageSource) -> ViewState:
    return replace(state, form=replace(state.form, image=image))


def request_delete(state: ViewState, cocktail_id: str) -> ViewState:
    cocktail = state.find(cocktail_id)
    if cocktail is None:
        return state
    return replace(state, delete_target=DeleteTarget(cocktail.id, cocktail.name))


def clear_delete_target(state: ViewState) -> ViewState:
    return replace(state, delete_target=None)


def notify(state: ViewState, message: str, kind: str, now: float) -> ViewState:
    """Show a notice, replacing any current one; it expires on its own."""
    return replace(state, notice=Notice(message, kind, now + NOTICE_SECONDS))
