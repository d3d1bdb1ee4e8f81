from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from ..core.errors import INVALID_JSON_MESSAGE
from ..db.sqlalchemy import get_db
from ..models.schemas import ContentItemIn, ContentItemOut
from ..services.content_store import ContentStore
from ..services.payloads import parse_payload

router = APIRouter(prefix="/items", tags=["Content"])

_NOT_FOUND = "Item not found."


# PUBLIC_INTERFACE
def get_store(db: Session = Depends(get_db)) -> ContentStore:
    """FastAPI dependency returning a ContentStore bound to the request session."""
    return ContentStore(db)


_INVALID_PAYLOAD_RESPONSE = {
    400: {"description": "Payload is not valid JSON.", "content": {"application/json": {"example": INVALID_JSON_MESSAGE}}},
}
_NOT_FOUND_RESPONSE = {404: {"description": "No item with this id."}}


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[ContentItemOut],
    summary="List content items",
    description="Returns every stored content item in id order.",
)
def list_content_items(store: ContentStore = Depends(get_store)) -> List[ContentItemOut]:
    return [ContentItemOut.model_validate(it) for it in store.list_all()]


# PUBLIC_INTERFACE
@router.get(
    "/{item_id}",
    response_model=ContentItemOut,
    summary="Get content item by id",
    responses=_NOT_FOUND_RESPONSE,
)
def get_content_item(item_id: int, store: ContentStore = Depends(get_store)) -> ContentItemOut:
    it = store.get(item_id)
    if it is None:
        raise HTTPException(status_code=404, detail=_NOT_FOUND)
    return ContentItemOut.model_validate(it)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ContentItemOut,
    status_code=201,
    summary="Create content item",
    description="Parse the raw payload string as JSON and store it as a new item.",
    responses=_INVALID_PAYLOAD_RESPONSE,
)
def create_content_item(
    body: ContentItemIn,
    request: Request,
    response: Response,
    store: ContentStore = Depends(get_store),
) -> ContentItemOut:
    """Create an item; the Location header points at GET /items/{id}."""
    payload = parse_payload(body.payload)
    it = store.insert(payload)
    response.headers["Location"] = str(request.url_for("get_content_item", item_id=it.id))
    return ContentItemOut.model_validate(it)


# PUBLIC_INTERFACE
@router.put(
    "/{item_id}",
    status_code=204,
    summary="Update content item",
    description="Replace the payload of an existing item. A missing id is reported before payload errors.",
    responses={**_NOT_FOUND_RESPONSE, **_INVALID_PAYLOAD_RESPONSE},
)
def update_content_item(item_id: int, body: ContentItemIn, store: ContentStore = Depends(get_store)) -> None:
    it = store.get(item_id)
    if it is None:
        raise HTTPException(status_code=404, detail=_NOT_FOUND)
    payload = parse_payload(body.payload)
    if not store.update(it, payload):
        raise HTTPException(status_code=404, detail=_NOT_FOUND)
    return None


# PUBLIC_INTERFACE
@router.delete(
    "/{item_id}",
    status_code=204,
    summary="Delete content item",
    responses=_NOT_FOUND_RESPONSE,
)
def delete_content_item(item_id: int, store: ContentStore = Depends(get_store)) -> None:
    if not store.delete(item_id):
        raise HTTPException(status_code=404, detail=_NOT_FOUND)
    return None
