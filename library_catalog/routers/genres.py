import asyncio

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from library_catalog.core.exceptions import GenreNotFoundException
from library_catalog.core.logger_config import log_info, log_warning
from library_catalog.core.templating import templates
from library_catalog.core.validation import validate_form
from library_catalog.models import Genre
from library_catalog.repositories import BookRepository, GenreRepository
from library_catalog.routers.dependencies import get_book_repository, get_genre_repository
from library_catalog.schemas import GenreCreateForm, GenreUpdateForm

router = APIRouter(prefix="/catalog", tags=["genres"])

GENRE_LIST_URL = "/catalog/genres"


def render_genre_form(request: Request, title: str, genre: Genre = None, errors: list = None) -> HTMLResponse:
    return templates.TemplateResponse(request, "genre_form.html", {"title": title, "genre": genre, "errors": errors or []})


@router.get("/genres", response_class=HTMLResponse)
async def genre_list(request: Request, genres: GenreRepository = Depends(get_genre_repository)):
    genre_list = await genres.get_all()
    return templates.TemplateResponse(request, "genre_list.html", {"title": "Genre List", "genre_list": genre_list})


@router.get("/genre/create", response_class=HTMLResponse)
async def genre_create_get(request: Request):
    return render_genre_form(request, "Create Genre")


@router.post("/genre/create", response_class=HTMLResponse)
async def genre_create_post(
    request: Request,
    name: str = Form(""),
    genres: GenreRepository = Depends(get_genre_repository),
):
    """
    Create a genre, or redirect to the existing genre with the same name.

    Submitting a name that already exists is not an error: the user lands on that genre's
    page and no second record is stored.
    """
    values, errors = validate_form(GenreCreateForm, {"name": name})
    genre = Genre(**values)

    if errors:
        return render_genre_form(request, "Create Genre", genre, errors)

    found_genre = await genres.get_by_name(genre.name)
    if found_genre is not None:
        log_info(f"Genre '{genre.name}' already exists (id: {found_genre.id})")
        return RedirectResponse(found_genre.url, status_code=status.HTTP_303_SEE_OTHER)

    genre = await genres.create(genre)
    log_info(f"Genre created: {genre.name} (id: {genre.id})")
    return RedirectResponse(genre.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/genre/{genre_id}/delete", response_class=HTMLResponse)
async def genre_delete_get(request: Request, genre_id: int, genres: GenreRepository = Depends(get_genre_repository)):
    genre = await genres.get_by_id(genre_id)
    return templates.TemplateResponse(request, "genre_delete.html", {"title": "Delete Genre", "genre": genre})


@router.post("/genre/{genre_id}/delete", response_class=HTMLResponse)
async def genre_delete_post(genre_id: int, genres: GenreRepository = Depends(get_genre_repository)):
    await genres.delete(genre_id)
    log_info(f"Genre deleted: id={genre_id}")
    return RedirectResponse(GENRE_LIST_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/genre/{genre_id}/update", response_class=HTMLResponse)
async def genre_update_get(request: Request, genre_id: int, genres: GenreRepository = Depends(get_genre_repository)):
    genre = await genres.get_by_id(genre_id)
    if genre is None:
        raise GenreNotFoundException()
    return render_genre_form(request, "Update Genre", genre)


@router.post("/genre/{genre_id}/update", response_class=HTMLResponse)
async def genre_update_post(
    request: Request,
    genre_id: int,
    name: str = Form(""),
    genres: GenreRepository = Depends(get_genre_repository),
):
    values, errors = validate_form(GenreUpdateForm, {"name": name})
    genre = Genre(id=genre_id, **values)

    if errors:
        log_warning(f"Genre update rejected: id={genre_id}")
        return render_genre_form(request, "Update Genre", genre, errors)

    updated = await genres.update(genre_id, genre)
    if updated is None:
        raise GenreNotFoundException()
    log_info(f"Genre updated: {updated.name} (id: {updated.id})")
    return RedirectResponse(updated.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/genre/{genre_id}", response_class=HTMLResponse)
async def genre_detail(
    request: Request,
    genre_id: int,
    genres: GenreRepository = Depends(get_genre_repository),
    books: BookRepository = Depends(get_book_repository),
):
    """Display a genre with every book filed under it."""
    genre, genre_books = await asyncio.gather(genres.get_by_id(genre_id), books.find_by_genre(genre_id))
    if genre is None:
        raise GenreNotFoundException()

    return templates.TemplateResponse(
        request, "genre_detail.html", {"title": "Genre Detail", "genre": genre, "genre_books": genre_books}
    )
