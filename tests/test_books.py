import re

from conftest import link_count, make_author, make_study_program
from lppm.models.associations import author_book


def book_payload(title="Sistem Informasi Manajemen", **overrides):
    payload = {
        "tahun_terbit": "2023",
        "isbn": "978-602-1",
        "kategori": "Monograf",
        "title": title,
        "tempat_terbit": "Surabaya",
        "penerbit": "Airlangga",
        "page": "120",
    }
    payload.update(overrides)
    return payload


def test_create_book_with_authors_sets_creators(client, admin):
    first = make_author("111", "Ani")
    second = make_author("222", "Budi")

    response = client.post("/api/books", json=book_payload(authors=[second, first]), headers=admin)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Book data created successfully."
    assert body["data"]["creators"] == "Budi, Ani"
    assert sorted(author["id"] for author in body["data"]["authors"]) == [first, second]


def test_unknown_author_id_is_reported_by_index(client, admin):
    author_id = make_author("111", "Ani")
    response = client.post("/api/books", json=book_payload(authors=[author_id, 77]), headers=admin)
    assert response.status_code == 422
    assert response.json()["errors"] == {"authors.1": ["The selected authors.1 is invalid."]}


def test_duplicate_title_is_rejected(client, admin):
    client.post("/api/books", json=book_payload(), headers=admin)
    response = client.post("/api/books", json=book_payload(), headers=admin)
    assert response.status_code == 422
    assert response.json()["errors"] == {"title": ["The title has already been taken."]}


def test_required_and_max_length(client, admin):
    response = client.post(
        "/api/books", json=book_payload(tahun_terbit="20234", isbn=""), headers=admin
    )
    assert response.status_code == 422
    assert set(response.json()["errors"]) == {"tahun_terbit", "isbn"}


def test_search_matches_title_and_creators_only(client, admin):
    author_id = make_author("111", "Rahmawati")
    client.post("/api/books", json=book_payload(authors=[author_id]), headers=admin)

    def total(term):
        return client.get("/api/books", params={"q": term}, headers=admin).json()["meta"]["total"]

    assert total("Airlangga") == 0
    assert total("manajemen") == 1
    assert total("rahma") == 1
    assert client.get("/api/books", params={"search": "sistem"}, headers=admin).json()["meta"]["total"] == 1


def test_list_is_latest_first_with_meta(client, admin):
    for index in range(12):
        client.post("/api/books", json=book_payload(f"Buku {index:02d}"), headers=admin)

    body = client.get("/api/books", headers=admin).json()
    assert [book["title"] for book in body["data"][:2]] == ["Buku 11", "Buku 10"]
    meta = body["meta"]
    assert meta["current_page"] == 1
    assert meta["last_page"] == 2
    assert meta["per_page"] == 10
    assert meta["total"] == 12
    assert (meta["from"], meta["to"]) == (1, 10)
    labels = [link["label"] for link in meta["links"]]
    assert labels == ["&laquo; Previous", "1", "2", "Next &raquo;"]
    assert meta["links"][0]["url"] is None
    assert meta["links"][1]["active"] is True
    assert "page=2" in meta["links"][-1]["url"]


def test_update_without_authors_detaches_them(client, admin):
    author_id = make_author("111", "Ani")
    book_id = client.post("/api/books", json=book_payload(authors=[author_id]), headers=admin).json()["data"]["id"]

    response = client.patch(f"/api/books/{book_id}", json=book_payload(penerbit="Erlangga"), headers=admin)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["penerbit"] == "Erlangga"
    assert data["authors"] == []
    assert data["creators"] is None
    assert link_count(author_book, "book_id", book_id) == 0

    response = client.patch(f"/api/books/{book_id}", json=book_payload(authors=[author_id]), headers=admin)
    data = response.json()["data"]
    assert [author["id"] for author in data["authors"]] == [author_id]
    assert data["creators"] == "Ani"


def test_update_can_keep_its_own_title(client, admin):
    book_id = client.post("/api/books", json=book_payload(), headers=admin).json()["data"]["id"]
    client.post("/api/books", json=book_payload("Other Book"), headers=admin)

    assert client.patch(f"/api/books/{book_id}", json=book_payload(), headers=admin).status_code == 200
    response = client.patch(f"/api/books/{book_id}", json=book_payload("Other Book"), headers=admin)
    assert response.status_code == 422


def test_delete_book_and_missing_book(client, admin, superadmin):
    author_id = make_author("111", "Ani")
    book_id = client.post("/api/books", json=book_payload(authors=[author_id]), headers=admin).json()["data"]["id"]
    assert link_count(author_book, "book_id", book_id) == 1

    response = client.delete(f"/api/books/{book_id}", headers=admin)
    assert response.status_code == 200
    assert response.json()["message"] == "Book deleted successfully."
    assert client.get(f"/api/books/{book_id}", headers=admin).status_code == 404
    assert client.delete(f"/api/books/{book_id}", headers=admin).status_code == 404

    assert link_count(author_book, "book_id", book_id) == 0
    assert client.get(f"/api/authors/{author_id}", headers=superadmin).status_code == 200


def test_books_require_a_token(client):
    assert client.get("/api/books").status_code == 401
    assert client.post("/api/books", json=book_payload()).status_code == 401


def test_grouped_by_category_is_public_and_filters_by_study_program(client, admin):
    informatics = make_study_program("Informatika")
    biology = make_study_program("Biologi")
    ani = make_author("111", "Ani", informatics)
    budi = make_author("222", "Budi", biology)
    client.post("/api/books", json=book_payload("A", kategori="Monograf", authors=[ani]), headers=admin)
    client.post("/api/books", json=book_payload("B", kategori="Monograf", authors=[budi]), headers=admin)
    client.post("/api/books", json=book_payload("C", kategori="Referensi", authors=[ani, budi]), headers=admin)

    response = client.get("/api/books/grouped-by-category")
    assert response.status_code == 200
    assert response.json()["data"] == {"Monograf": {"count": 2}, "Referensi": {"count": 1}}

    response = client.get("/api/books/grouped-by-category", params={"study_program_id": biology})
    assert response.json()["data"] == {"Monograf": {"count": 1}, "Referensi": {"count": 1}}


def test_chart_data_counts_per_study_program(client, admin):
    informatics = make_study_program("Informatika")
    biology = make_study_program("Biologi")
    make_study_program("Akuntansi")
    ani = make_author("111", "Ani", informatics)
    budi = make_author("222", "Budi", informatics)
    client.post("/api/books", json=book_payload("A", tahun_terbit="2023", authors=[ani, budi]), headers=admin)
    client.post("/api/books", json=book_payload("B", tahun_terbit="2022", authors=[ani]), headers=admin)

    data = client.get("/api/books/chart-data").json()["data"]
    assert data["labels"] == ["Akuntansi", "Biologi", "Informatika"]
    assert data["datasets"]["data"] == [0, 0, 2]
    assert data["total"] == 2
    assert [program["percentage"] for program in data["study_programs"]] == [0, 0, 100]
    colors = data["datasets"]["background_color"]
    assert len(colors) == 3
    assert all(re.fullmatch(r"#[0-9A-F]{6}", color) for color in colors)

    data = client.get("/api/books/chart-data", params={"year": "2022"}).json()["data"]
    assert data["datasets"]["data"] == [0, 0, 1]
    assert data["labels"] == ["Akuntansi", "Biologi", "Informatika"]

    data = client.get("/api/books/chart-data", params={"year": "1999"}).json()["data"]
    assert data["total"] == 0
    assert all(program["percentage"] == 0 for program in data["study_programs"])
