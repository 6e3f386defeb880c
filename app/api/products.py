"""Product management API endpoints.

Provides endpoints for product administration:
- GET /products - list products (paginated, filtered)
- GET /products/{id} - product details in one language
- POST /products - create a product (multipart form)
- PUT /products/{id} - update a product translation (multipart form)
- PATCH /products/{id}/price/{new_price} - set the price
- PATCH /products/{id}/stock/{added_quantity} - adjust the stock
- POST /products/{id}/views - record a view
- PUT /products/{id}/categories - assign categories
- DELETE /products/{id} - delete a product
- /products/{id}/images[/{image_id}] - image CRUD
"""

from decimal import Decimal
from typing import Annotated

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import (
    CategoryAssignRequestSchema,
    CategoryAssignResponse,
    ChangedResponse,
    ErrorResponse,
    ProductImageSchema,
    ProductImagesResponse,
    ProductSchema,
    ProductsListResponse,
    ViewCountResponse,
)
from app.application.product_service import (
    CategoryAssignItem,
    CategoryAssignRequest,
    ProductCreateRequest,
    ProductImageCreateRequest,
    ProductImageUpdateRequest,
    ProductService,
    ProductUpdateRequest,
    UploadedFile,
    get_product_service,
)
from app.catalog.service import (
    PaginatedResult,
    ProductImageView,
    ProductPagingRequest,
    ProductView,
)
from app.domain.exceptions import ImageNotFoundError
from app.infrastructure.config import settings
from app.infrastructure.database import get_session
from app.infrastructure.storage import StorageService, get_storage

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    storage: Annotated[StorageService, Depends(get_storage)],
) -> ProductService:
    """Get product service."""
    return get_product_service(session, storage=storage)


# ============================================================================
# Converters
# ============================================================================


def product_to_schema(product: ProductView, storage: StorageService) -> ProductSchema:
    """Convert ProductView to ProductSchema."""
    thumbnail_url = None
    if product.thumbnail_image:
        thumbnail_url = storage.get_file_url(product.thumbnail_image)

    return ProductSchema(
        id=product.id,
        price=product.price,
        original_price=product.original_price,
        stock=product.stock,
        view_count=product.view_count,
        date_created=product.date_created,
        language_id=product.language_id,
        name=product.name,
        description=product.description,
        details=product.details,
        seo_description=product.seo_description,
        seo_title=product.seo_title,
        seo_alias=product.seo_alias,
        thumbnail_image=product.thumbnail_image,
        thumbnail_url=thumbnail_url,
        categories=product.categories,
    )


def page_to_response(
    page: PaginatedResult[ProductView],
    storage: StorageService,
) -> ProductsListResponse:
    """Convert a page of ProductView to ProductsListResponse."""
    return ProductsListResponse(
        items=[product_to_schema(item, storage) for item in page.items],
        total=page.total,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
        has_more=page.has_next,
    )


def image_to_schema(image: ProductImageView, storage: StorageService) -> ProductImageSchema:
    """Convert ProductImageView to ProductImageSchema."""
    return ProductImageSchema(
        id=image.id,
        product_id=image.product_id,
        image_path=image.image_path,
        url=storage.get_file_url(image.image_path) if image.image_path else None,
        caption=image.caption,
        is_default=image.is_default,
        date_created=image.date_created,
        sort_order=image.sort_order,
        file_size=image.file_size,
    )


def to_uploaded_file(upload: UploadFile | None) -> UploadedFile | None:
    """Wrap a multipart upload for the service layer."""
    if upload is None:
        return None
    return UploadedFile(filename=upload.filename or "", stream=upload.file)


# ============================================================================
# Product Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductsListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List products",
    description="Get a paginated list of products in one language.",
)
async def list_products(
    service: Annotated[ProductService, Depends(get_service)],
    language_id: str = Query(default=settings.default_language_id, description="Language id"),
    keyword: str | None = Query(default=None, description="Substring of the product name"),
    category_id: int | None = Query(default=None, ge=0, description="Filter by category"),
    page: int = Query(default=1, ge=1, description="Page number"),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=100, description="Items per page"),
) -> ProductsListResponse:
    """List products with pagination and filtering.

    Args:
        service: Product service.
        language_id: Language of the returned texts.
        keyword: Name filter.
        category_id: Category filter (0 means any).
        page: Page number (1-based).
        page_size: Items per page.

    Returns:
        Paginated list of products.
    """
    result = await service.get_all_paging(
        ProductPagingRequest(
            language_id=language_id,
            keyword=keyword,
            category_id=category_id,
            page=page,
            page_size=page_size,
        )
    )
    return page_to_response(result, service.storage)


@router.get(
    "/{product_id}",
    response_model=ProductSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
    language_id: str = Query(default=settings.default_language_id, description="Language id"),
) -> ProductSchema:
    """Get a product with its categories and thumbnail in one language."""
    product = await service.get_by_id(product_id, language_id)
    return product_to_schema(product, service.storage)


@router.post(
    "",
    response_model=ProductSchema,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create product",
    description="Create a product with its first translation and an optional thumbnail.",
)
async def create_product(
    service: Annotated[ProductService, Depends(get_service)],
    price: Annotated[Decimal, Form(ge=0)],
    original_price: Annotated[Decimal, Form(ge=0)],
    stock: Annotated[int, Form(ge=0)],
    name: Annotated[str, Form(min_length=1, max_length=200)],
    language_id: Annotated[str, Form()] = settings.default_language_id,
    description: Annotated[str | None, Form()] = None,
    details: Annotated[str | None, Form()] = None,
    seo_description: Annotated[str | None, Form()] = None,
    seo_title: Annotated[str | None, Form()] = None,
    seo_alias: Annotated[str | None, Form()] = None,
    thumbnail_image: Annotated[UploadFile | None, File()] = None,
) -> ProductSchema:
    """Create a product.

    Returns:
        The created product in its language.
    """
    product_id = await service.create(
        ProductCreateRequest(
            price=price,
            original_price=original_price,
            stock=stock,
            name=name,
            language_id=language_id,
            description=description,
            details=details,
            seo_description=seo_description,
            seo_title=seo_title,
            seo_alias=seo_alias,
            thumbnail_image=to_uploaded_file(thumbnail_image),
        )
    )
    product = await service.get_by_id(product_id, language_id)
    return product_to_schema(product, service.storage)


@router.put(
    "/{product_id}",
    response_model=ProductSchema,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update product",
    description="Overwrite the product's translation in one language and optionally its thumbnail.",
)
async def update_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
    name: Annotated[str, Form(min_length=1, max_length=200)],
    language_id: Annotated[str, Form()] = settings.default_language_id,
    description: Annotated[str | None, Form()] = None,
    details: Annotated[str | None, Form()] = None,
    seo_description: Annotated[str | None, Form()] = None,
    seo_title: Annotated[str | None, Form()] = None,
    seo_alias: Annotated[str | None, Form()] = None,
    thumbnail_image: Annotated[UploadFile | None, File()] = None,
) -> ProductSchema:
    """Update a product translation."""
    product = await service.update(
        ProductUpdateRequest(
            id=product_id,
            language_id=language_id,
            name=name,
            description=description,
            details=details,
            seo_description=seo_description,
            seo_title=seo_title,
            seo_alias=seo_alias,
            thumbnail_image=to_uploaded_file(thumbnail_image),
        )
    )
    return product_to_schema(product, service.storage)


@router.patch(
    "/{product_id}/price/{new_price}",
    response_model=ChangedResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update price",
)
async def update_price(
    product_id: int,
    new_price: Decimal,
    service: Annotated[ProductService, Depends(get_service)],
) -> ChangedResponse:
    """Set a product's price."""
    if new_price < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error_code": "INVALID_PRICE", "message": "Price cannot be negative"},
        )
    changed = await service.update_price(product_id, new_price)
    return ChangedResponse(changed=changed)


@router.patch(
    "/{product_id}/stock/{added_quantity}",
    response_model=ChangedResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update stock",
    description="Add a quantity (negative to remove) to the product's stock.",
)
async def update_stock(
    product_id: int,
    added_quantity: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> ChangedResponse:
    """Adjust a product's stock."""
    changed = await service.update_stock(product_id, added_quantity)
    return ChangedResponse(changed=changed)


@router.post(
    "/{product_id}/views",
    response_model=ViewCountResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Record a view",
)
async def add_view_count(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> ViewCountResponse:
    """Increment a product's view count."""
    view_count = await service.add_view_count(product_id)
    return ViewCountResponse(view_count=view_count)


@router.put(
    "/{product_id}/categories",
    response_model=CategoryAssignResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Assign categories",
    description="Add or remove category links so they match the selection.",
)
async def assign_categories(
    product_id: int,
    request: CategoryAssignRequestSchema,
    service: Annotated[ProductService, Depends(get_service)],
) -> CategoryAssignResponse:
    """Assign a product to categories by name.

    Raises:
        HTTPException: If the product or a category cannot be found.
    """
    result = await service.category_assign(
        product_id,
        CategoryAssignRequest(
            categories=[
                CategoryAssignItem(name=item.name, selected=item.selected)
                for item in request.categories
            ]
        ),
    )

    if not result.success:
        status_code = (
            status.HTTP_404_NOT_FOUND
            if result.error_code == "PRODUCT_NOT_FOUND"
            else status.HTTP_400_BAD_REQUEST
        )
        raise HTTPException(
            status_code=status_code,
            detail={
                "error_code": result.error_code or "CATEGORY_ASSIGN_FAILED",
                "message": result.error or "Failed to assign categories",
            },
        )

    return CategoryAssignResponse(success=True, product_id=product_id)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> Response:
    """Delete a product with its translations, images and category links."""
    await service.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Product Image Endpoints
# ============================================================================


async def _image_of_product(service: ProductService, product_id: int, image_id: int) -> ProductImageView:
    image = await service.get_image_by_id(image_id)
    if image.product_id != product_id:
        raise ImageNotFoundError(image_id)
    return image


@router.get(
    "/{product_id}/images",
    response_model=ProductImagesResponse,
    summary="List product images",
)
async def list_images(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductImagesResponse:
    """List the images of a product ordered by sort order."""
    images = await service.get_list_images(product_id)
    return ProductImagesResponse(
        items=[image_to_schema(image, service.storage) for image in images],
        total=len(images),
    )


@router.get(
    "/{product_id}/images/{image_id}",
    response_model=ProductImageSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get product image",
)
async def get_image(
    product_id: int,
    image_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductImageSchema:
    """Get one image of a product."""
    image = await _image_of_product(service, product_id, image_id)
    return image_to_schema(image, service.storage)


@router.post(
    "/{product_id}/images",
    response_model=ProductImageSchema,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
    summary="Add product image",
)
async def add_image(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
    caption: Annotated[str | None, Form(max_length=200)] = None,
    is_default: Annotated[bool, Form()] = False,
    sort_order: Annotated[int, Form()] = 0,
    image_file: Annotated[UploadFile | None, File()] = None,
) -> ProductImageSchema:
    """Upload an image for a product."""
    image_id = await service.add_image(
        product_id,
        ProductImageCreateRequest(
            caption=caption,
            is_default=is_default,
            sort_order=sort_order,
            image_file=to_uploaded_file(image_file),
        ),
    )
    image = await service.get_image_by_id(image_id)
    return image_to_schema(image, service.storage)


@router.put(
    "/{product_id}/images/{image_id}",
    response_model=ProductImageSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Update product image",
)
async def update_image(
    product_id: int,
    image_id: int,
    service: Annotated[ProductService, Depends(get_service)],
    caption: Annotated[str | None, Form(max_length=200)] = None,
    is_default: Annotated[bool | None, Form()] = None,
    sort_order: Annotated[int | None, Form()] = None,
    image_file: Annotated[UploadFile | None, File()] = None,
) -> ProductImageSchema:
    """Change an image's caption, order, default flag or file."""
    await _image_of_product(service, product_id, image_id)
    image = await service.update_image(
        image_id,
        ProductImageUpdateRequest(
            caption=caption,
            is_default=is_default,
            sort_order=sort_order,
            image_file=to_uploaded_file(image_file),
        ),
    )
    return image_to_schema(image, service.storage)


@router.delete(
    "/{product_id}/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Remove product image",
)
async def remove_image(
    product_id: int,
    image_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> Response:
    """Delete an image and its file."""
    await _image_of_product(service, product_id, image_id)
    await service.remove_image(image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
