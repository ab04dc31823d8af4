"""Client flows over the cocktail API.

Each action runs one request at a time and waits for it. Every successful
create, update or delete is followed by a full reload of the list; the
in-memory records are never patched locally.
"""

import logging
import time
from dataclasses import replace
from typing import BinaryIO, Callable

from client import state as st
from client.api import ApiError, CocktailApiClient
from client.view import render_page
from core.config import settings
from core.exceptions import ValidationError
from core.uploads import check_image

logger = logging.getLogger(__name__)


class CocktailBook:
    def __init__(self, api: CocktailApiClient, clock: Callable[[], float] = time.monotonic):
        self.api = api
        self.clock = clock
        self.state = st.ViewState()

    def _notify(self, message: str, kind: str = "success") -> None:
        self.state = st.notify(self.state, message, kind, self.clock())

    def render(self, show_form: bool = True) -> str:
        return render_page(self.state, self.clock(), show_form=show_form)

    # Loading

    def load(self) -> bool:
        self.state = replace(self.state, loading=True)
        try:
            records = self.api.list_cocktails()
        except ApiError as e:
            logger.error("Error loading cocktails: %s", e)
            self._notify("Error loading cocktails", "error")
            return False
        else:
            self.state = st.with_records(self.state, records)
            return True
        finally:
            self.state = replace(self.state, loading=False)

    # Card list

    def toggle_expand(self, cocktail_id: str) -> None:
        self.state = st.toggle_expand(self.state, cocktail_id)

    def collapse(self) -> None:
        self.state = st.collapse(self.state)

    def search(self, text: str) -> None:
        self.state = st.set_search(self.state, text)

    def set_layout(self, layout: str) -> None:
        self.state = st.set_layout(self.state, layout)

    def open_image(self, cocktail_id: str) -> None:
        self.state = st.open_image(self.state, cocktail_id)

    def close_image(self) -> None:
        self.state = st.close_image(self.state)

    # Form

    def edit(self, cocktail_id: str) -> None:
        self.state = st.begin_edit(self.state, cocktail_id)

    def cancel_edit(self) -> None:
        self.state = st.reset_form(self.state)

    def update_form(self, **fields: str) -> None:
        self.state = st.update_form(self.state, **fields)

    def choose_image_source(self, kind: str) -> None:
        self.state = st.choose_image_source(self.state, kind)

    def set_image_url(self, url: str) -> None:
        self.state = st.set_image(self.state, st.ExternalUrl(url))

    def upload_image(self, fileobj: BinaryIO, filename: str, content_type: str, size: int) -> bool:
        """Upload an image and make it the form's image source."""
        # a failed attempt must not leave the previous upload selected
        self.state = st.set_image(self.state, st.UploadedPath())
        try:
            check_image(content_type, size, settings.max_upload_bytes)
        except ValidationError as e:
            self._notify(str(e), "error")
            return False

        try:
            file_path = self.api.upload_image(fileobj, filename, content_type)
        except ApiError as e:
            logger.error("Upload error: %s", e)
            self._notify(f"Upload failed: {e}", "error")
            return False

        self.state = st.set_image(self.state, st.UploadedPath(file_path))
        return True

    def submit(self) -> bool:
        form = self.state.form
        try:
            if form.is_editing:
                self.api.update_cocktail(form.editing_id, form.to_payload())
                message = "Cocktail updated successfully!"
            else:
                self.api.create_cocktail(form.to_payload())
                message = "Cocktail added successfully!"
        except ApiError as e:
            logger.error("Error saving cocktail: %s", e)
            self._notify("Error saving cocktail", "error")
            return False

        self._notify(message)
        self.state = st.reset_form(self.state)
        self.load()
        return True

    # Delete

    def request_delete(self, cocktail_id: str) -> None:
        self.state = st.request_delete(self.state, cocktail_id)

    def cancel_delete(self) -> None:
        self.state = st.clear_delete_target(self.state)

    def confirm_delete(self) -> bool:
        target = self.state.delete_target
        if target is None:
            return False
        try:
            self.api.delete_cocktail(target.id)
        except ApiError as e:
            logger.error("Error deleting cocktail %s: %s", target.id, e)
            self._notify("Error deleting cocktail", "error")
            return False
        else:
            self._notify("Cocktail deleted successfully!")
            self.load()
            return True
        finally:
            self.state = st.clear_delete_target(self.state)
