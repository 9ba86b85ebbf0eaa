import csv
import io
from datetime import datetime

from openpyxl import Workbook

from conftest import make_author, make_study_program

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

PREAMBLE = [
    ["LEMBAGA PENELITIAN DAN PENGABDIAN KEPADA MASYARAKAT"],
    ["Rekap data"],
    ["Tahun 2024"],
    ["-"],
]


def xlsx_bytes(rows):
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def csv_bytes(rows):
    buffer = io.StringIO()
    csv.writer(buffer).writerows(rows)
    return buffer.getvalue().encode("utf-8")


def upload(client, path, headers, content, filename="data.xlsx", **form):
    mime = XLSX if filename.endswith(".xlsx") else "text/csv"
    data = {key: str(value).lower() if isinstance(value, bool) else value for key, value in form.items()}
    return client.post(path, files={"file": (filename, content, mime)}, data=data, headers=headers)


BOOK_HEADINGS = ["Tahun Terbit", "ISBN", "Kategori", "Title", "Author", "Tempat Terbit", "Penerbit", "Page"]


def book_row(title, year=2023):
    return [year, "978-602-1", "Monograf", title, "Ani, Budi", "Surabaya", "Airlangga", 120]


def test_book_import_reads_rows_below_heading(client, admin):
    rows = PREAMBLE + [BOOK_HEADINGS, book_row("Buku Satu"), [], book_row("Buku Dua", 2024)]
    response = upload(client, "/api/books/import", admin, xlsx_bytes(rows))
    assert response.status_code == 201
    assert response.json() == {"success": True, "message": "Books data imported successfully."}

    books = client.get("/api/books", headers=admin).json()["data"]
    assert sorted(book["title"] for book in books) == ["Buku Dua", "Buku Satu"]
    first = next(book for book in books if book["title"] == "Buku Satu")
    assert first["tahun_terbit"] == "2023"
    assert first["page"] == "120"
    assert first["creators"] == "Ani, Budi"


def test_book_import_collects_every_failure_and_saves_nothing(client, admin):
    upload(client, "/api/books/import", admin, xlsx_bytes(PREAMBLE + [BOOK_HEADINGS, book_row("Sudah Ada")]))

    bad_year = book_row("Tahun Salah", year=20231)
    rows = PREAMBLE + [BOOK_HEADINGS, book_row("Baru"), book_row("Sudah Ada"), bad_year, book_row("Baru")]
    response = upload(client, "/api/books/import", admin, xlsx_bytes(rows))
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    failures = [(failure["row"], failure["attribute"]) for failure in body["failures"]]
    assert failures == [(7, "title"), (8, "tahun_terbit"), (9, "title")]
    assert body["failures"][0]["errors"] == ["The title has already been taken."]

    assert client.get("/api/books", headers=admin).json()["meta"]["total"] == 1


def test_book_import_reset_replaces_table(client, admin):
    author_id = make_author("111", "Ani")
    client.post(
        "/api/books",
        json={
            "tahun_terbit": "2020", "isbn": "1", "kategori": "Monograf", "title": "Lama",
            "tempat_terbit": "Malang", "penerbit": "UB Press", "page": "90", "authors": [author_id],
        },
        headers=admin,
    )
    rows = PREAMBLE + [BOOK_HEADINGS, book_row("Lama"), book_row("Baru")]
    response = upload(client, "/api/books/import", admin, xlsx_bytes(rows), reset_table=True)
    assert response.status_code == 201

    books = client.get("/api/books", headers=admin).json()["data"]
    assert sorted(book["title"] for book in books) == ["Baru", "Lama"]
    assert all(book["authors"] == [] for book in books)


def test_failed_reset_import_keeps_existing_rows(client, admin):
    upload(client, "/api/books/import", admin, xlsx_bytes(PREAMBLE + [BOOK_HEADINGS, book_row("Lama")]))

    rows = PREAMBLE + [BOOK_HEADINGS, book_row("Baru"), book_row("")]
    response = upload(client, "/api/books/import", admin, xlsx_bytes(rows), reset_table=True)
    assert response.status_code == 422

    books = client.get("/api/books", headers=admin).json()["data"]
    assert [book["title"] for book in books] == ["Lama"]


def test_import_rejects_other_file_types(client, admin):
    response = upload(client, "/api/books/import", admin, b"hello", filename="books.txt")
    assert response.status_code == 422
    assert response.json()["errors"] == {
        "file": ["The file field must be a file of type: xlsx, xls, csv."]
    }


def test_import_requires_records_access(client):
    response = upload(client, "/api/books/import", {}, xlsx_bytes(PREAMBLE))
    assert response.status_code == 401


HKI_HEADINGS = [
    "Tahun Permohonan", "Nomor Permohonan", "Kategori", "Title", "Pemegang Paten", "Inventor",
    "Status", "No Publikasi", "Tgl Publikasi", "Filing Date", "Reception Date", "No Registrasi",
    "Tgl Registrasi",
]


def hki_row(title, filing_date="2022-02-10"):
    return [
        2022, "P00202201234", "Paten", title, "Universitas Contoh", "Ani", "Granted",
        "-", "-", filing_date, datetime(2022, 2, 11), "IDS0001", "20/01/2023",
    ]


def test_hki_import_converts_dashes_and_dates(client, admin):
    response = upload(client, "/api/hki/import", admin, xlsx_bytes(PREAMBLE + [HKI_HEADINGS, hki_row("Alat Ukur")]))
    assert response.status_code == 201

    hki = client.get("/api/hki", headers=admin).json()["data"][0]
    assert hki["nomor_publikasi"] is None
    assert hki["tanggal_publikasi"] is None
    assert hki["filing_date"] == "2022-02-10"
    assert hki["reception_date"] == "2022-02-11"
    assert hki["tanggal_registrasi"] == "2023-01-20"
    assert hki["tahun_permohonan"] == "2022"


def test_hki_import_stops_at_first_bad_row(client, admin):
    rows = PREAMBLE + [HKI_HEADINGS, hki_row("Alat Ukur"), hki_row("Alat Ukur")]
    response = upload(client, "/api/hki/import", admin, xlsx_bytes(rows))
    assert response.status_code == 422
    assert response.json()["message"] == "Row 7: The title has already been taken."
    assert client.get("/api/hki", headers=admin).json()["meta"]["total"] == 0


AUTHOR_HEADER = [
    "NO", "SINTA ID", "NIDN", "NAMA", "AFILIASI", "PRODI", "PENDIDIKAN", "JABATAN",
    "GELAR DEPAN", "GELAR BELAKANG", "SINTA SCORE",
]


def author_row(number, nidn, name, program):
    return [number, f"S{nidn}", nidn, name, "Universitas Contoh", program, "S2", "Lektor", "", "M.Kom", "120"]


def test_author_import_creates_study_programs_once(client, superadmin):
    existing = make_study_program("Informatika")
    rows = [
        AUTHOR_HEADER,
        author_row(1, "0011", "Ani", "Informatika"),
        author_row(2, "0022", "Budi", "Biologi"),
        author_row(3, "0033", "Citra", "Biologi"),
        ["", "", "", ""],
    ]
    response = upload(client, "/api/authors/import", superadmin, csv_bytes(rows), filename="authors.csv")
    assert response.status_code == 201

    authors = client.get("/api/authors", headers=superadmin).json()["data"]
    assert [author["nidn"] for author in authors] == ["0011", "0022", "0033"]
    assert authors[0]["study_program_id"] == existing
    assert authors[1]["study_program_id"] == authors[2]["study_program_id"]
    assert authors[0]["title_prefix"] is None
    assert authors[0]["sinta_score"] == "120"

    programs = client.get("/api/study-programs", headers=superadmin).json()["meta"]["total"]
    assert programs == 2


def test_author_import_rejects_known_nidn(client, superadmin):
    make_author("0022", "Budi")
    rows = [AUTHOR_HEADER, author_row(1, "0011", "Ani", "Informatika"), author_row(2, "0022", "Budi", "Biologi")]
    response = upload(client, "/api/authors/import", superadmin, csv_bytes(rows), filename="authors.csv")
    assert response.status_code == 422
    assert response.json()["message"] == "Author with NIDN 0022 already exists."
    assert client.get("/api/authors", headers=superadmin).json()["meta"]["total"] == 1


def test_author_import_rejects_nidn_repeated_in_file(client, superadmin):
    rows = [AUTHOR_HEADER, author_row(1, "0011", "Ani", "Informatika"), author_row(2, "0011", "Ani", "Informatika")]
    response = upload(client, "/api/authors/import", superadmin, csv_bytes(rows), filename="authors.csv")
    assert response.status_code == 422
    assert response.json()["message"] == "Author with NIDN 0011 already exists."


def grant_row(number, nidn_ketua, members=(), amount="Rp. 1.500.000"):
    fields = [
        "Ahmad Fauzi", nidn_ketua, "Universitas Contoh", "071001", f"Judul {number}", "PDP",
        "2023", "2023", "2024", "1", "Kebencanaan", "Penelitian Dosen Pemula", "Disetujui",
        amount, "6655", "Universitas Contoh", "3", "Hibah", "DIKTI", "Indonesia", "APBN",
    ]
    member_cells = list(members) + ["-"] * (5 - len(members))
    return [number] + fields + member_cells


def test_research_import_links_leader_and_members(client, admin):
    make_author("0011", "Ahmad Fauzi")
    make_author("0022", "Dewi Lestari")
    rows = [["NO", "NAMA KETUA"], grant_row(1, "0011", ["0022"]), grant_row(2, "0022", amount="-")]
    response = upload(client, "/api/researches/import", admin, csv_bytes(rows), filename="research.csv")
    assert response.status_code == 201

    researches = client.get("/api/researches", headers=admin).json()["data"]
    assert researches[0]["creators"] == "Ahmad Fauzi, Dewi Lestari"
    assert researches[0]["dana_disetujui"] == "Rp 1.500.000,00"
    assert researches[1]["creators"] == "Dewi Lestari"
    assert researches[1]["dana_disetujui"] == "Rp 0,00"


def test_service_import_checks_every_nidn_before_writing(client, admin):
    make_author("0011", "Ahmad Fauzi")
    rows = [grant_row(1, "0011"), grant_row(2, "0011", ["0099"])]
    response = upload(client, "/api/services/import", admin, csv_bytes(rows), filename="services.csv")
    assert response.status_code == 422
    assert response.json()["message"] == "Author with NIDN 0099 not found."
    assert client.get("/api/services", headers=admin).json()["meta"]["total"] == 0


SCOPUS_HEADINGS = ["Identifier", "Quartile", "Title", "Publication Name", "Creator", "Year", "Citation"]


def test_publication_import_requires_category(client, admin):
    rows = PREAMBLE + [SCOPUS_HEADINGS]
    response = upload(client, "/api/publications/import", admin, xlsx_bytes(rows))
    assert response.status_code == 422
    assert "category" in response.json()["errors"]


def test_scopus_import_maps_dash_quartile(client, admin):
    rows = PREAMBLE + [
        SCOPUS_HEADINGS,
        ["2-s2.0-1", "-", "Flood Model", "Water", "Ani", 2024, 3],
        ["2-s2.0-2", "Q2", "Drought Model", "Water", "Budi", 2023, 0],
    ]
    response = upload(client, "/api/publications/import", admin, xlsx_bytes(rows), category="scopus")
    assert response.status_code == 201

    publications = client.get("/api/publications", params={"category": "scopus"}, headers=admin).json()["data"]
    quartiles = {publication["title"]: publication["quartile"] for publication in publications}
    assert quartiles == {"Flood Model": "Jurnal Nasional", "Drought Model": "Q2"}


def test_scopus_import_collects_missing_fields(client, admin):
    rows = PREAMBLE + [SCOPUS_HEADINGS, ["2-s2.0-1", "Q1", "Flood Model", "Water", "Ani", "", 3]]
    response = upload(client, "/api/publications/import", admin, xlsx_bytes(rows), category="scopus")
    assert response.status_code == 422
    assert response.json()["failures"][0]["errors"] == ["The year field is required."]


GOOGLE_HEADINGS = ["Accreditation", "Title", "Journal", "Authors", "Year", "Citation"]


def test_google_import_into_publications_and_google_table(client, admin):
    rows = PREAMBLE + [GOOGLE_HEADINGS, ["Sinta 2", "Analisis Data", "Jurnal Statistika", "Ani", 2022, 5]]

    response = upload(client, "/api/publications/import", admin, xlsx_bytes(rows), category="google")
    assert response.status_code == 201
    publication = client.get("/api/publications", headers=admin).json()["data"][0]
    assert publication["category"] == "google"
    assert publication["journal"] == "Jurnal Statistika"

    response = upload(client, "/api/google-publications/import", admin, xlsx_bytes(rows))
    assert response.status_code == 201
    google = client.get("/api/google-publications", headers=admin).json()["data"][0]
    assert google["accreditation"] == "Sinta 2"
    assert google["citation"] == "5"
