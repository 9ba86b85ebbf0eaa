"""
Research and community service grant schemas.
"""
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import Field, field_serializer

from ..utils.helpers import format_currency
from .common import AuthoredRead, Payload, RequiredStr


class GrantCreate(Payload):
    """Grant payload; the leader is looked up by ``nidn_ketua``."""
    nama_ketua: RequiredStr(255)
    nidn_ketua: RequiredStr(100)
    afiliasi_ketua: RequiredStr(255)
    kd_pt_ketua: RequiredStr(50)
    judul: RequiredStr(255)
    nama_singkat_skema: RequiredStr(50)
    thn_pertama_usulan: RequiredStr(4)
    thn_usulan_kegiatan: RequiredStr(4)
    thn_pelaksanaan_kegiatan: RequiredStr(4)
    lama_kegiatan: RequiredStr(4)
    bidang_fokus: RequiredStr(100)
    nama_skema: RequiredStr(100)
    status_usulan: RequiredStr(50)
    dana_disetujui: Annotated[int, Field(ge=0)]
    afiliasi_sinta_id: RequiredStr(20)
    nama_institusi_penerima_dana: RequiredStr(255)
    target_tkt: RequiredStr(20)
    nama_program_hibah: RequiredStr(100)
    kategori_sumber_dana: RequiredStr(50)
    negara_sumber_dana: RequiredStr(50)
    sumber_dana: RequiredStr(50)
    author_members: Optional[List[int]] = None


class GrantRead(AuthoredRead):
    id: int
    nama_ketua: str
    nidn_ketua: str
    afiliasi_ketua: Optional[str] = None
    kd_pt_ketua: Optional[str] = None
    judul: str
    nama_singkat_skema: Optional[str] = None
    thn_pertama_usulan: Optional[str] = None
    thn_usulan_kegiatan: Optional[str] = None
    thn_pelaksanaan_kegiatan: Optional[str] = None
    lama_kegiatan: Optional[str] = None
    bidang_fokus: Optional[str] = None
    nama_skema: Optional[str] = None
    status_usulan: Optional[str] = None
    dana_disetujui: Decimal
    afiliasi_sinta_id: Optional[str] = None
    nama_institusi_penerima_dana: Optional[str] = None
    target_tkt: Optional[str] = None
    nama_program_hibah: Optional[str] = None
    kategori_sumber_dana: Optional[str] = None
    negara_sumber_dana: Optional[str] = None
    sumber_dana: Optional[str] = None

    @field_serializer("dana_disetujui")
    def serialize_amount(self, value: Decimal) -> str:
        return format_currency(value)
