"""
Author pages: list, detail, create, update, delete
"""

from datetime import date

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def author_form(**overrides):
    data = {"first_name": "John", "family_name": "Doe", "date_of_birth": "", "date_of_death": ""}
    data.update(overrides)
    return data


async def test_author_list_sorted_by_family_name(async_client: AsyncClient, make_author):
    await make_author("Terry", "Pratchett")
    await make_author("Jane", "Austen")

    response = await async_client.get("/catalog/authors")

    assert response.status_code == 200
    assert "Author List" in response.text
    assert response.text.index("Austen, Jane") < response.text.index("Pratchett, Terry")


async def test_author_detail_lists_books(async_client: AsyncClient, make_author, make_book):
    author = await make_author(date_of_birth=date(1920, 1, 2))
    await make_book(author, title="Foundation", summary="A galactic empire falls.")

    response = await async_client.get(author.url)

    assert response.status_code == 200
    assert "Asimov, Isaac" in response.text
    assert "Jan 2, 1920" in response.text
    assert "Foundation" in response.text
    assert "A galactic empire falls." in response.text


async def test_author_detail_not_found(async_client: AsyncClient):
    response = await async_client.get("/catalog/author/999")

    assert response.status_code == 404
    assert "Author Not Found!" in response.text


async def test_author_detail_malformed_id(async_client: AsyncClient):
    response = await async_client.get("/catalog/author/not-a-number")

    assert response.status_code == 422


async def test_author_create_form(async_client: AsyncClient):
    response = await async_client.get("/catalog/author/create")

    assert response.status_code == 200
    assert "Create Author" in response.text


async def test_author_create_redirects_to_new_author(async_client: AsyncClient, author_repo):
    response = await async_client.post(
        "/catalog/author/create", data=author_form(first_name=" John ", date_of_birth="1950-06-01")
    )

    assert response.status_code == 303
    authors = await author_repo.get_all()
    assert len(authors) == 1
    assert response.headers["location"] == f"/catalog/author/{authors[0].id}"
    assert authors[0].first_name == "John"
    assert authors[0].date_of_birth == date(1950, 6, 1)
    assert authors[0].date_of_death is None


async def test_author_create_rejects_non_alphanumeric(async_client: AsyncClient, author_repo):
    response = await async_client.post("/catalog/author/create", data=author_form(first_name="John!"))

    assert response.status_code == 200
    assert "First name has non-alphanumeric characters." in response.text
    assert 'value="John!"' in response.text
    assert await author_repo.get_all() == []


async def test_author_create_reports_every_failing_field(async_client: AsyncClient, author_repo):
    response = await async_client.post(
        "/catalog/author/create", data=author_form(first_name="", family_name="", date_of_death="someday")
    )

    assert response.status_code == 200
    assert "First Name must be specified" in response.text
    assert "First name has non-alphanumeric characters." in response.text
    assert "Family name must be specified." in response.text
    assert "Family name has non-alphanumeric characters." in response.text
    assert "Invalid date of death" in response.text
    assert await author_repo.get_all() == []


async def test_author_update_form_prefilled(async_client: AsyncClient, make_author):
    author = await make_author(date_of_birth=date(1920, 1, 2))

    response = await async_client.get(f"{author.url}/update")

    assert response.status_code == 200
    assert "Update Author" in response.text
    assert 'value="Isaac"' in response.text
    assert 'value="1920-01-02"' in response.text


async def test_author_update_form_not_found(async_client: AsyncClient):
    response = await async_client.get("/catalog/author/999/update")

    assert response.status_code == 404


async def test_author_update_replaces_all_fields(async_client: AsyncClient, author_repo, make_author):
    author = await make_author(date_of_birth=date(1920, 1, 2), date_of_death=date(1992, 4, 6))

    response = await async_client.post(
        f"{author.url}/update", data=author_form(first_name="Isaac", family_name="Azimov", date_of_birth="1920-01-02")
    )

    assert response.status_code == 303
    assert response.headers["location"] == author.url
    stored = await author_repo.get_by_id(author.id)
    assert stored.id == author.id
    assert stored.family_name == "Azimov"
    assert stored.date_of_birth == date(1920, 1, 2)
    assert stored.date_of_death is None
    assert len(await author_repo.get_all()) == 1


async def test_author_update_invalid_leaves_store_untouched(async_client: AsyncClient, author_repo, make_author):
    author = await make_author()

    response = await async_client.post(f"{author.url}/update", data=author_form(family_name="D0e-Smith"))

    assert response.status_code == 200
    assert "Family name has non-alphanumeric characters." in response.text
    stored = await author_repo.get_by_id(author.id)
    assert stored.first_name == "Isaac"
    assert stored.family_name == "Asimov"


async def test_author_update_missing_author(async_client: AsyncClient):
    response = await async_client.post("/catalog/author/999/update", data=author_form())

    assert response.status_code == 404


async def test_author_delete_confirmation(async_client: AsyncClient, make_author):
    author = await make_author()

    response = await async_client.get(f"{author.url}/delete")

    assert response.status_code == 200
    assert "Do you really want to delete this Author?" in response.text
    assert f'name="authorid" value="{author.id}"' in response.text


async def test_author_delete_confirmation_for_missing_author_redirects(async_client: AsyncClient):
    response = await async_client.get("/catalog/author/999/delete")

    assert response.status_code == 302
    assert response.headers["location"] == "/catalog/authors"


async def test_author_delete_refused_while_books_reference_author(
    async_client: AsyncClient, author_repo, make_author, make_book
):
    author = await make_author()
    await make_book(author, title="Foundation")

    response = await async_client.post(f"{author.url}/delete", data={"authorid": str(author.id)})

    assert response.status_code == 200
    assert "Delete the following books before attempting to delete this author." in response.text
    assert "Foundation" in response.text
    assert await author_repo.get_by_id(author.id) is not None


async def test_author_delete_without_books(async_client: AsyncClient, author_repo, make_author):
    author = await make_author()

    response = await async_client.post(f"{author.url}/delete", data={"authorid": str(author.id)})

    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/authors"
    assert await author_repo.get_by_id(author.id) is None


async def test_author_delete_uses_submitted_identifier(async_client: AsyncClient, author_repo, make_author):
    kept = await make_author("Jane", "Austen")
    removed = await make_author()

    response = await async_client.post(f"{kept.url}/delete", data={"authorid": str(removed.id)})

    assert response.status_code == 303
    assert await author_repo.get_by_id(removed.id) is None
    assert await author_repo.get_by_id(kept.id) is not None


async def test_author_create_accepts_reduced_precision_dates(async_client: AsyncClient, author_repo):
    response = await async_client.post(
        "/catalog/author/create", data=author_form(date_of_birth="1950-06", date_of_death="1990")
    )

    assert response.status_code == 303
    [author] = await author_repo.get_all()
    assert author.date_of_birth == date(1950, 6, 1)
    assert author.date_of_death == date(1990, 1, 1)
