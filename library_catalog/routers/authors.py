import asyncio

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from library_catalog.core.exceptions import AuthorNotFoundException
from library_catalog.core.logger_config import log_info, log_warning
from library_catalog.core.templating import templates
from library_catalog.core.validation import validate_form
from library_catalog.models import Author
from library_catalog.repositories import AuthorRepository, BookRepository
from library_catalog.routers.dependencies import get_author_repository, get_book_repository
from library_catalog.schemas import AuthorForm

router = APIRouter(prefix="/catalog", tags=["authors"])

AUTHOR_LIST_URL = "/catalog/authors"


def render_author_form(request: Request, title: str, author: Author = None, errors: list = None) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "author_form.html", {"title": title, "author": author, "errors": errors or []}
    )


@router.get("/authors", response_class=HTMLResponse)
async def author_list(request: Request, authors: AuthorRepository = Depends(get_author_repository)):
    """Display list of all authors, by family name."""
    author_list = await authors.get_all()
    return templates.TemplateResponse(request, "author_list.html", {"title": "Author List", "author_list": author_list})


@router.get("/author/create", response_class=HTMLResponse)
async def author_create_get(request: Request):
    return render_author_form(request, "Create Author")


@router.post("/author/create", response_class=HTMLResponse)
async def author_create_post(
    request: Request,
    first_name: str = Form(""),
    family_name: str = Form(""),
    date_of_birth: str = Form(""),
    date_of_death: str = Form(""),
    authors: AuthorRepository = Depends(get_author_repository),
):
    """
    Validate the submitted author, then insert it and redirect to its page.

    An invalid form is shown again with the sanitized values and the errors; nothing is stored.
    """
    values, errors = validate_form(
        AuthorForm,
        {
            "first_name": first_name,
            "family_name": family_name,
            "date_of_birth": date_of_birth,
            "date_of_death": date_of_death,
        },
    )
    author = Author(**values)

    if errors:
        log_warning("Author form rejected", context={"errors": [error["msg"] for error in errors]})
        return render_author_form(request, "Create Author", author, errors)

    author = await authors.create(author)
    log_info(f"Author created: {author.name} (id: {author.id})")
    return RedirectResponse(author.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/author/{author_id}/delete", response_class=HTMLResponse)
async def author_delete_get(
    request: Request,
    author_id: int,
    authors: AuthorRepository = Depends(get_author_repository),
    books: BookRepository = Depends(get_book_repository),
):
    """Confirm deletion; an author that no longer exists sends the user back to the list."""
    author, author_books = await asyncio.gather(authors.get_by_id(author_id), books.find_by_author(author_id))
    if author is None:
        return RedirectResponse(AUTHOR_LIST_URL, status_code=status.HTTP_302_FOUND)

    return templates.TemplateResponse(
        request, "author_delete.html", {"title": "Delete Author", "author": author, "author_books": author_books}
    )


@router.post("/author/{author_id}/delete", response_class=HTMLResponse)
async def author_delete_post(
    request: Request,
    authorid: int = Form(...),
    authors: AuthorRepository = Depends(get_author_repository),
    books: BookRepository = Depends(get_book_repository),
):
    """
    Delete the author named by the submitted ``authorid``.

    While any book still references the author the delete is refused and the
    confirmation page is shown again with those books.
    """
    author, author_books = await asyncio.gather(authors.get_by_id(authorid), books.find_by_author(authorid))
    if author_books:
        log_warning(f"Refusing to delete author id={authorid}: {len(author_books)} book(s) reference it")
        return templates.TemplateResponse(
            request, "author_delete.html", {"title": "Delete Author", "author": author, "author_books": author_books}
        )

    await authors.delete(authorid)
    log_info(f"Author deleted: id={authorid}")
    return RedirectResponse(AUTHOR_LIST_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/author/{author_id}/update", response_class=HTMLResponse)
async def author_update_get(request: Request, author_id: int, authors: AuthorRepository = Depends(get_author_repository)):
    author = await authors.get_by_id(author_id)
    if author is None:
        raise AuthorNotFoundException()
    return render_author_form(request, "Update Author", author)


@router.post("/author/{author_id}/update", response_class=HTMLResponse)
async def author_update_post(
    request: Request,
    author_id: int,
    first_name: str = Form(""),
    family_name: str = Form(""),
    date_of_birth: str = Form(""),
    date_of_death: str = Form(""),
    authors: AuthorRepository = Depends(get_author_repository),
):
    """Validate, then replace every field of the author, keeping its id."""
    values, errors = validate_form(
        AuthorForm,
        {
            "first_name": first_name,
            "family_name": family_name,
            "date_of_birth": date_of_birth,
            "date_of_death": date_of_death,
        },
    )
    author = Author(id=author_id, **values)

    if errors:
        log_warning(f"Author update rejected: id={author_id}", context={"errors": [error["msg"] for error in errors]})
        return render_author_form(request, "Update Author", author, errors)

    updated = await authors.update(author_id, author)
    if updated is None:
        raise AuthorNotFoundException()
    log_info(f"Author updated: {updated.name} (id: {updated.id})")
    return RedirectResponse(updated.url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/author/{author_id}", response_class=HTMLResponse)
async def author_detail(
    request: Request,
    author_id: int,
    authors: AuthorRepository = Depends(get_author_repository),
    books: BookRepository = Depends(get_book_repository),
):
    """Display an author with the titles and summaries of their books."""
    author, author_books = await asyncio.gather(
        authors.get_by_id(author_id), books.find_by_author(author_id, summary_only=True)
    )
    if author is None:
        raise AuthorNotFoundException()

    return templates.TemplateResponse(
        request, "author_detail.html", {"title": "Author Detail", "author": author, "author_books": author_books}
    )
