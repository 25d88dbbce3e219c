from fastapi import APIRouter, Depends, Response, status

from snippetbox.api.v1.dependencies import get_snippet_store
from snippetbox.api.v1.schemas import CreatedId, SnippetCreate, SnippetOut
from snippetbox.exceptions.base import NotFoundError
from snippetbox.stores.protocols import SnippetStoreProtocol
from snippetbox.stores.records import is_storable_id
from snippetbox.validators.forms import validate_snippet_create

router = APIRouter(prefix="/snippets", tags=["snippets"])


@router.get("", response_model=list[SnippetOut])
async def latest_snippets(snippets: SnippetStoreProtocol = Depends(get_snippet_store)):
    return await snippets.latest()


@router.get("/{snippet_id}", response_model=SnippetOut)
async def view_snippet(snippet_id: int, snippets: SnippetStoreProtocol = Depends(get_snippet_store)):
    if not is_storable_id(snippet_id):
        raise NotFoundError("Snippet not found")
    return await snippets.get(snippet_id)


@router.post("", response_model=CreatedId, status_code=status.HTTP_201_CREATED)
async def create_snippet(
    form: SnippetCreate,
    response: Response,
    snippets: SnippetStoreProtocol = Depends(get_snippet_store),
):
    validate_snippet_create(form.title, form.content, form.expires).raise_if_invalid()

    snippet_id = await snippets.insert(form.title, form.content, form.expires)
    response.headers["Location"] = f"/api/v1/snippets/{snippet_id}"
    return CreatedId(id=snippet_id)
