from conftest import make_author, make_study_program


def author_payload(**overrides):
    payload = {
        "sinta_id": "1",
        "nidn": "999",
        "name": "Jane",
        "affiliation": "X",
        "study_program_id": make_study_program() if "study_program_id" not in overrides else None,
        "last_education": "S1",
        "functional_position": "Lektor",
    }
    payload.update(overrides)
    return payload


def test_create_author_then_duplicate_nidn(client, superadmin):
    payload = author_payload()
    response = client.post("/api/authors", json=payload, headers=superadmin)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["nidn"] == "999"
    assert data["study_program"]["name"] == "Teknik Informatika"

    response = client.post("/api/authors", json=payload, headers=superadmin)
    assert response.status_code == 422
    assert response.json()["errors"]["nidn"] == ["The nidn has already been taken."]


def test_create_author_requires_fields_and_known_study_program(client, superadmin):
    response = client.post(
        "/api/authors",
        json={"sinta_id": "1", "nidn": "1", "name": "Jane", "study_program_id": 42},
        headers=superadmin,
    )
    assert response.status_code == 422
    errors = response.json()["errors"]
    assert {"affiliation", "last_education", "functional_position"} <= set(errors)

    payload = author_payload(study_program_id=42)
    response = client.post("/api/authors", json=payload, headers=superadmin)
    assert response.status_code == 422
    assert response.json()["errors"] == {
        "study_program_id": ["The selected study program id is invalid."]
    }


def test_authors_are_superadmin_only(client, admin):
    assert client.get("/api/authors", headers=admin).status_code == 403


def test_update_author_may_keep_its_own_nidn(client, superadmin):
    program_id = make_study_program()
    author_id = make_author("100", "Budi", program_id)
    make_author("200", "Sari", program_id)

    payload = author_payload(nidn="100", name="Budi Santoso", study_program_id=program_id)
    response = client.patch(f"/api/authors/{author_id}", json=payload, headers=superadmin)
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Budi Santoso"

    payload["nidn"] = "200"
    response = client.patch(f"/api/authors/{author_id}", json=payload, headers=superadmin)
    assert response.status_code == 422
    assert "nidn" in response.json()["errors"]


def test_search_authors_by_name_sinta_id_and_nidn(client, superadmin):
    make_author("0011", "Ahmad Fauzi")
    make_author("0022", "Dewi Lestari")

    def names(term):
        body = client.get("/api/authors", params={"q": term}, headers=superadmin).json()
        return [author["name"] for author in body["data"]]

    assert names("fauzi") == ["Ahmad Fauzi"]
    assert names("0022") == ["Dewi Lestari"]
    assert names("S0011") == ["Ahmad Fauzi"]
    assert names("Contoh") == []


def test_get_missing_author(client, superadmin):
    response = client.get("/api/authors/404", headers=superadmin)
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Author not found."}


def test_delete_author_keeps_their_books(client, superadmin):
    author_id = make_author("300", "Rina")
    co_author_id = make_author("301", "Budi")
    book = {
        "tahun_terbit": "2023",
        "isbn": "978-1",
        "kategori": "Monograf",
        "title": "Sistem Informasi",
        "tempat_terbit": "Surabaya",
        "penerbit": "Airlangga",
        "page": "120",
        "authors": [author_id, co_author_id],
    }
    shared_id = client.post("/api/books", json=book, headers=superadmin).json()["data"]["id"]
    book.update(title="Basis Data", authors=[author_id])
    solo_id = client.post("/api/books", json=book, headers=superadmin).json()["data"]["id"]

    response = client.delete(f"/api/authors/{author_id}", headers=superadmin)
    assert response.status_code == 200

    shared = client.get(f"/api/books/{shared_id}", headers=superadmin).json()["data"]
    assert [author["id"] for author in shared["authors"]] == [co_author_id]
    assert shared["creators"] == "Budi"

    solo = client.get(f"/api/books/{solo_id}", headers=superadmin).json()["data"]
    assert solo["authors"] == []
    assert solo["creators"] is None


def test_study_program_crud(client, superadmin):
    response = client.post("/api/study-programs", json={"name": "Sistem Informasi"}, headers=superadmin)
    assert response.status_code == 201
    program_id = response.json()["data"]["id"]
    make_author("400", "Agus", program_id)

    data = client.get(f"/api/study-programs/{program_id}", headers=superadmin).json()["data"]
    assert [author["nidn"] for author in data["authors"]] == ["400"]

    response = client.patch(
        f"/api/study-programs/{program_id}", json={"name": "Informatika"}, headers=superadmin
    )
    assert response.json()["data"]["name"] == "Informatika"

    response = client.delete(f"/api/study-programs/{program_id}", headers=superadmin)
    assert response.status_code == 200
    assert client.get(f"/api/study-programs/{program_id}", headers=superadmin).status_code == 404

    authors = client.get("/api/authors", headers=superadmin).json()["data"]
    assert authors[0]["study_program_id"] is None


def test_study_program_name_is_required(client, superadmin):
    response = client.post("/api/study-programs", json={"name": ""}, headers=superadmin)
    assert response.status_code == 422
    assert "name" in response.json()["errors"]
