import logging
from dataclasses import replace
from typing import Optional
from urllib.parse import urlencode

import pydantic
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from client import state as st
from client.state import Cocktail, ViewState
from client.view import render_page
from core.exceptions import CocktailBookError, ValidationError
from core.uploads import LocalImageStorage, is_uploaded_reference
from db.database import get_async_session
from routers.cocktails import insert_cocktail, list_cocktails, remove_cocktail, replace_cocktail
from routers.uploads import get_image_storage
from schemas.cocktails import CocktailInput

logger = logging.getLogger(__name__)

router = APIRouter()

# Outcome of a form post, carried to the page it redirects to
NOTICES = {
    "added": ("Cocktail added successfully!", "success"),
    "updated": ("Cocktail updated successfully!", "success"),
    "deleted": ("Cocktail deleted successfully!", "success"),
    "delete-failed": ("Error deleting cocktail", "error"),
}


async def _load_state(db: AsyncSession, **selectors) -> ViewState:
    records = tuple(Cocktail.from_json(c.to_schema) for c in await list_cocktails(db))
    return st.with_records(ViewState(**selectors), records)


def _redirect(q: str, done: str) -> RedirectResponse:
    return RedirectResponse("/?" + urlencode({"q": q, "done": done}), status_code=303)


@router.get("/", response_class=HTMLResponse)
async def catalog_page(
    q: str = "",
    expanded: Optional[str] = None,
    view: str = "grid",
    image: Optional[str] = None,
    edit: Optional[str] = None,
    delete: Optional[str] = None,
    done: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
):
    """Catalog page; every selector comes from the query string."""
    state = await _load_state(
        db,
        search=q,
        expanded_id=expanded or None,
        layout=view if view in st.LAYOUTS else "grid",
    )
    if image:
        state = st.open_image(state, image)
    if edit:
        state = st.begin_edit(state, edit)
    if delete:
        state = st.request_delete(state, delete)
    if done in NOTICES:
        message, kind = NOTICES[done]
        state = st.notify(state, message, kind, now=0.0)
    return render_page(state, now=0.0)


@router.post("/", response_class=HTMLResponse)
async def submit_cocktail_form(
    cocktail_id: str = Form(""),
    q: str = Form(""),
    theCock: str = Form(""),
    theIngredients: str = Form(""),
    theRecipe: str = Form(""),
    imageType: str = Form("url"),
    theJpeg: str = Form(""),
    currentUpload: str = Form(""),
    theComment: str = Form(""),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_async_session),
    storage: LocalImageStorage = Depends(get_image_storage),
):
    """Create, or update when ``cocktail_id`` is set, then redirect back to the list."""
    form = st.FormState(
        editing_id=cocktail_id or None,
        name=theCock,
        ingredients=theIngredients,
        recipe=theRecipe,
        comment=theComment,
    )

    async def rerender(message: str, status_code: int) -> HTMLResponse:
        state = await _load_state(db, search=q, form=form)
        state = st.notify(state, message, "error", now=0.0)
        return HTMLResponse(render_page(state, now=0.0), status_code=status_code)

    if imageType == "upload":
        if image is not None and image.filename:
            data = await image.read(storage.max_bytes + 1)
            try:
                path = storage.store(data, image.filename, image.content_type)
            except ValidationError as e:
                logger.warning("Rejected upload %r (%s): %s", image.filename, image.content_type, e)
                form = replace(form, image=st.UploadedPath())
                return await rerender(f"Upload failed: {e}", e.status_code)
            form = replace(form, image=st.UploadedPath(path))
        elif is_uploaded_reference(currentUpload):
            form = replace(form, image=st.UploadedPath(currentUpload))
        else:
            form = replace(form, image=st.UploadedPath())
    else:
        form = replace(form, image=st.ExternalUrl(theJpeg))

    try:
        cocktail = CocktailInput(**form.to_payload())
    except pydantic.ValidationError:
        return await rerender("Error saving cocktail", 400)

    try:
        if form.is_editing:
            await replace_cocktail(db, form.editing_id, cocktail)
            done = "updated"
        else:
            await insert_cocktail(db, cocktail)
            done = "added"
    except CocktailBookError as e:
        logger.error("Error saving cocktail: %s", e)
        return await rerender("Error saving cocktail", e.status_code)

    return _redirect(q, done)


@router.post("/delete/{cocktail_id}")
async def confirm_delete(
    cocktail_id: str,
    q: str = Form(""),
    db: AsyncSession = Depends(get_async_session),
):
    """Delete from the confirmation modal; the target is dropped either way."""
    try:
        await remove_cocktail(db, cocktail_id)
    except CocktailBookError as e:
        logger.error("Error deleting cocktail %s: %s", cocktail_id, e)
        return _redirect(q, "delete-failed")
    return _redirect(q, "deleted")
