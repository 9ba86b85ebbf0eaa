"""
Book and HKI Pydantic schemas.
"""
from datetime import date
from typing import List, Optional

from .common import AuthoredRead, NullableStr, Payload, RequiredStr


class BookCreate(Payload):
    tahun_terbit: RequiredStr(4)
    isbn: RequiredStr(50)
    kategori: RequiredStr(50)
    title: RequiredStr(255)
    tempat_terbit: RequiredStr(100)
    penerbit: RequiredStr(255)
    page: RequiredStr(20)
    authors: Optional[List[int]] = None


class BookRead(AuthoredRead):
    id: int
    tahun_terbit: str
    isbn: str
    kategori: str
    title: str
    tempat_terbit: str
    penerbit: str
    page: str


class HKICreate(Payload):
    tahun_permohonan: NullableStr(4) = None
    nomor_permohonan: RequiredStr(50)
    kategori: NullableStr(50) = None
    title: RequiredStr(255)
    pemegang_paten: NullableStr(255) = None
    inventor: NullableStr(255) = None
    status: NullableStr(50) = None
    nomor_publikasi: RequiredStr(50)
    tanggal_publikasi: date
    filing_date: date
    reception_date: date
    nomor_registrasi: RequiredStr(50)
    tanggal_registrasi: date
    authors: Optional[List[int]] = None


class HKIRead(AuthoredRead):
    id: int
    tahun_permohonan: Optional[str] = None
    nomor_permohonan: Optional[str] = None
    kategori: Optional[str] = None
    title: Optional[str] = None
    pemegang_paten: Optional[str] = None
    inventor: Optional[str] = None
    status: Optional[str] = None
    nomor_publikasi: Optional[str] = None
    tanggal_publikasi: Optional[date] = None
    filing_date: Optional[date] = None
    reception_date: Optional[date] = None
    nomor_registrasi: Optional[str] = None
    tanggal_registrasi: Optional[date] = None
