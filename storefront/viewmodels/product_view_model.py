# storefront/viewmodels/product_view_model.py
import logging
from typing import List, Optional
from ..errors import StorefrontError
from ..models.category import Category
from ..models.form import ProductDraft, SelectedImage
from ..models.product import Product, ProductRequest
from ..models.status import SubmissionStatus
from ..services.image_service import ImageService
from ..services.product_repository import ProductRepository
from ..utils.observable import StateFlow
from .. import constants
from . import form

logger = logging.getLogger(__name__)

class ProductViewModel:
    """Product list, product form and submission state for one user session"""

    def __init__(self, repository: ProductRepository, image_service: Optional[ImageService] = None):
        self.repository = repository
        self.image_service = image_service

        self.products: StateFlow[List[Product]] = StateFlow([])
        self.categories: StateFlow[List[Category]] = StateFlow([])
        self.selected_product: StateFlow[Optional[Product]] = StateFlow(None)
        self.is_loading: StateFlow[bool] = StateFlow(False)
        self.error: StateFlow[Optional[str]] = StateFlow(None)
        self.form_state: StateFlow[ProductDraft] = StateFlow(ProductDraft())
        self.creation_success: StateFlow[bool] = StateFlow(False)
        self.selected_image: StateFlow[Optional[SelectedImage]] = StateFlow(None)
        self.status: StateFlow[SubmissionStatus] = StateFlow(SubmissionStatus.idle())

        self._loading_count = 0
        self._submitting = False
        self._deleting = False
        self._started = False

    @property
    def is_started(self) -> bool:
        return self._started

    async def start(self):
        """Initial load of categories and products (once per session)"""
        if self._started:
            return
        self._started = True
        await self.load_categories()
        await self.load_products()

    # Product list

    async def load_products(self):
        self._begin_loading()
        self.error.value = None
        try:
            self.products.value = await self.repository.get_products()
        except (StorefrontError, ValueError) as e:
            logger.warning("Loading products failed: %s", e)
            self.error.value = str(e) or constants.UNKNOWN_ERROR
        finally:
            self._end_loading()

    async def load_categories(self):
        try:
            categories = await self.repository.get_categories()
        except (StorefrontError, ValueError) as e:
            logger.warning("Loading categories failed: %s", e)
            self.error.value = constants.CATEGORIES_ERROR.format(detail=e)
            return

        self.categories.value = categories
        if categories and not self.form_state.value.categoria_id:
            self.form_state.value = form.on_categoria_id_change(
                self.form_state.value, form.default_categoria_id(categories)
            )

    async def load_product_by_id(self, product_id: int):
        self._begin_loading()
        self.error.value = None
        try:
            self.selected_product.value = await self.repository.get_product_by_id(product_id)
        except (StorefrontError, ValueError) as e:
            logger.warning("Loading product %s failed: %s", product_id, e)
            self.error.value = str(e) or constants.UNKNOWN_ERROR
        finally:
            self._end_loading()

    async def delete_product(self, product_id: int) -> bool:
        """Delete remotely, then reload the list; returns True when deleted"""
        if self._deleting:
            logger.info("Delete of %s ignored, another delete is in flight", product_id)
            return False

        self._deleting = True
        self._begin_loading()
        self.error.value = None
        try:
            deleted = await self.repository.delete_product(product_id)
            if deleted:
                await self.load_products()
            else:
                self.error.value = constants.DELETE_FAILED
            return deleted
        except StorefrontError as e:
            logger.warning("Deleting product %s failed: %s", product_id, e)
            self.error.value = str(e) or constants.DELETE_ERROR
            return False
        finally:
            self._deleting = False
            self._end_loading()

    # Form edits

    def on_name_change(self, name: str):
        self.form_state.value = form.on_name_change(self.form_state.value, name)

    def on_description_change(self, description: str):
        self.form_state.value = form.on_description_change(self.form_state.value, description)

    def on_price_change(self, price: str):
        self.form_state.value = form.on_price_change(self.form_state.value, price)

    def on_stock_change(self, stock: str):
        self.form_state.value = form.on_stock_change(self.form_state.value, stock)

    def on_img_change(self, img: str):
        self.form_state.value = form.on_img_change(self.form_state.value, img)

    def on_categoria_id_change(self, categoria_id: str):
        self.form_state.value = form.on_categoria_id_change(self.form_state.value, categoria_id)

    def update_selected_image(self, image: Optional[SelectedImage]):
        self.selected_image.value = image
        # A picked image satisfies the image requirement
        if image is not None:
            self.form_state.value = self.form_state.value.model_copy(update={"img_error": None})

    def validate_form(self) -> bool:
        draft, is_valid = form.validate(
            self.form_state.value, self.selected_image.value is not None
        )
        self.form_state.value = draft
        return is_valid

    # Submission

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    async def create_product(self) -> bool:
        """Validate and submit the draft; returns True when the product was created"""
        if self._submitting:
            logger.info("Submit ignored, a submission is already in flight")
            return False

        if not self.validate_form():
            self.error.value = None
            self.status.value = SubmissionStatus.idle()
            return False

        self._submitting = True
        self._begin_loading()
        self.error.value = None
        self.status.value = SubmissionStatus.loading()
        try:
            draft = self.form_state.value
            img = await self._resolve_image(draft)

            request = ProductRequest(
                name=draft.name,
                description=draft.description,
                price=int(draft.price),
                stock=int(draft.stock),
                img=img,
                categoria_id=int(draft.categoria_id)
            )
            created = await self.repository.create_product(request)
            logger.info("Product created: %s", created.id if created else draft.name)

            self.creation_success.value = True
            self.status.value = SubmissionStatus.success()
            self.reset_form()
            await self.load_products()
            return True

        except (StorefrontError, OSError, ValueError) as e:
            logger.warning("Creating product failed: %s", e)
            message = str(e) or constants.CREATE_FAILED
            self.error.value = message
            self.status.value = SubmissionStatus.error(message)
            return False

        finally:
            self._submitting = False
            self._end_loading()

    async def _resolve_image(self, draft: ProductDraft) -> str:
        image = self.selected_image.value
        if image is None:
            return draft.img
        if self.image_service is None:
            raise StorefrontError(constants.IMAGE_UNAVAILABLE)
        return await self.image_service.resolve(image)

    def reset_form(self):
        self.form_state.value = form.reset_draft(self.categories.value)
        self.selected_image.value = None

    def reset_creation_success(self):
        self.creation_success.value = False
        if self.status.value == SubmissionStatus.success():
            self.status.value = SubmissionStatus.idle()

    def clear_error(self):
        self.error.value = None
        if self.status.value.message is not None:
            self.status.value = SubmissionStatus.idle()

    def _begin_loading(self):
        self._loading_count += 1
        self.is_loading.value = True

    def _end_loading(self):
        self._loading_count = max(0, self._loading_count - 1)
        self.is_loading.value = self._loading_count > 0
