"""
asset_import/mappers/field_catalog.py

Canonical asset fields, their value types, eligible asset kinds and the
multilingual (French/English) header synonyms used to recognise them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from asset_import.domain.asset_import import AssetKind, ValueType
from asset_import.mappers.similarity import normalize_header

_IT = frozenset({AssetKind.IT_ASSET})
_TELECOM = frozenset({AssetKind.TELECOM_ASSET})
_ALL_KINDS = _IT | _TELECOM


@dataclass(frozen=True)
class FieldSpec:
    """
    One canonical target field.

    ``min_fuzzy_confidence`` raises the bar for non-exact matches on fields
    that attract false positives; ``rejected_header_tokens`` lists normalized
    tokens that disqualify a header for this field even when it scores well.
    """

    name: str
    value_type: str
    asset_kinds: frozenset[str]
    synonyms: tuple[str, ...]
    min_fuzzy_confidence: float | None = None
    rejected_header_tokens: tuple[str, ...] = ()

    def rejects(self, normalized_header: str) -> bool:
        return any(token in normalized_header for token in self.rejected_header_tokens)


class FieldCatalog:
    """
    Immutable, ordered collection of FieldSpec entries.

    Declaration order matters: when two fields tie on confidence for one
    header, the field declared first wins.
    """

    def __init__(self, fields: Iterable[FieldSpec]) -> None:
        ordered = tuple(fields)
        names = [spec.name for spec in ordered]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate canonical fields in catalog: {', '.join(duplicates)}")

        self._fields = ordered
        self._by_name = {spec.name: spec for spec in ordered}
        self._normalized_synonyms: dict[str, tuple[str, ...]] = {
            spec.name: tuple(
                dict.fromkeys(
                    normalized
                    for normalized in (normalize_header(synonym) for synonym in spec.synonyms)
                    if normalized
                )
            )
            for spec in ordered
        }

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> FieldSpec | None:
        return self._by_name.get(name)

    def eligible_fields(self, asset_kind: str) -> tuple[FieldSpec, ...]:
        return tuple(spec for spec in self._fields if asset_kind in spec.asset_kinds)

    def normalized_synonyms(self, name: str) -> tuple[str, ...]:
        return self._normalized_synonyms.get(name, ())

    def value_type_of(self, name: str) -> str:
        spec = self._by_name.get(name)
        return spec.value_type if spec is not None else ValueType.TEXT


DEFAULT_FIELD_SPECS: tuple[FieldSpec, ...] = (
    # IT assets
    FieldSpec(
        name="device_type",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=(
            "type", "device type", "type d'appareil", "type appareil", "categorie",
            "catégorie", "category", "kind", "nature", "desktop", "laptop", "portable",
            "ordinateur", "computer", "pc", "phone", "téléphone", "mobile", "tablet",
            "tablette", "printer", "imprimante", "monitor", "écran", "ecran", "router",
            "routeur", "switch", "server", "serveur",
        ),
    ),
    FieldSpec(
        name="brand",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=(
            "marque", "fabricant", "manufacturer", "make", "constructeur", "fournisseur",
            "supplier",
        ),
    ),
    FieldSpec(
        name="model",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=("modele", "modèle", "model", "reference", "référence", "ref", "version", "variant"),
    ),
    FieldSpec(
        name="serial_number",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=(
            "numero serie", "numéro série", "serial", "serial number", "sn", "s/n",
            "n° série", "n° serie",
        ),
    ),
    FieldSpec(
        name="hostname",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=(
            "hostname", "nom machine", "nom d'hôte", "computer name", "nom ordinateur",
            "machine name",
        ),
    ),
    FieldSpec(
        name="ticket_number",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=(
            "ticket", "numéro ticket", "numero ticket", "ticket number", "n° ticket",
            "n°ticket", "incident",
        ),
    ),
    FieldSpec(
        name="date",
        value_type=ValueType.DATE,
        asset_kinds=_ALL_KINDS,
        synonyms=(
            "date", "date acquisition", "date d'acquisition", "acquisition date",
            "purchase date", "date achat", "date d'achat", "created", "créé",
            "date activation", "activation date",
        ),
    ),
    FieldSpec(
        name="warranty_expiration",
        value_type=ValueType.DATE,
        asset_kinds=_IT,
        synonyms=(
            "garantie", "warranty", "expiration garantie", "warranty expiry", "fin garantie",
            "date fin garantie",
        ),
    ),
    FieldSpec(
        name="status",
        value_type=ValueType.TEXT,
        asset_kinds=_ALL_KINDS,
        synonyms=("statut", "status", "etat", "état", "state", "condition", "situation"),
    ),
    FieldSpec(
        name="assigned_to",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=(
            "assigned to", "assigné à", "assignee", "utilisateur", "user", "owner",
            "propriétaire", "responsable",
        ),
    ),
    FieldSpec(
        name="department",
        value_type=ValueType.TEXT,
        asset_kinds=_ALL_KINDS,
        synonyms=(
            "departement", "département", "department", "service", "division", "secteur",
            "area", "zone",
        ),
    ),
    FieldSpec(
        name="location",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=("location", "emplacement", "lieu", "place", "site", "adresse", "address"),
    ),
    FieldSpec(
        name="processor",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=("processeur", "processor", "cpu", "chip", "puce", "microprocesseur"),
    ),
    FieldSpec(
        name="ram_gb",
        value_type=ValueType.NUMBER,
        asset_kinds=_IT,
        synonyms=(
            "ram", "mémoire", "memoire", "memory", "ram gb", "ram go", "mémoire gb",
            "memoire gb",
        ),
    ),
    FieldSpec(
        name="disk_gb",
        value_type=ValueType.NUMBER,
        asset_kinds=_IT,
        synonyms=(
            "disque", "disk", "storage", "stockage", "hdd", "ssd", "disque gb", "disk gb",
            "storage gb", "stockage gb",
        ),
    ),
    FieldSpec(
        name="os",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=(
            "os", "operating system", "système d'exploitation", "systeme d'exploitation",
            "windows", "linux", "macos",
        ),
    ),
    FieldSpec(
        name="imei",
        value_type=ValueType.TEXT,
        asset_kinds=_IT,
        synonyms=("imei", "imei number", "numéro imei", "numero imei"),
    ),
    FieldSpec(
        name="has_mouse",
        value_type=ValueType.BOOLEAN,
        asset_kinds=_IT,
        synonyms=("souris", "mouse", "avec souris", "with mouse"),
    ),
    FieldSpec(
        name="has_keyboard",
        value_type=ValueType.BOOLEAN,
        asset_kinds=_IT,
        synonyms=("clavier", "keyboard", "avec clavier", "with keyboard"),
    ),
    FieldSpec(
        name="has_screen",
        value_type=ValueType.BOOLEAN,
        asset_kinds=_IT,
        synonyms=("écran", "ecran", "screen", "monitor", "avec écran", "with screen"),
    ),
    FieldSpec(
        name="has_headphone",
        value_type=ValueType.BOOLEAN,
        asset_kinds=_IT,
        synonyms=(
            "casque", "headphone", "headset", "écouteurs", "ecouteurs", "avec casque",
            "with headphone",
        ),
    ),
    # Telecom assets
    FieldSpec(
        name="sim_number",
        value_type=ValueType.TEXT,
        asset_kinds=_TELECOM,
        synonyms=(
            "numero sim", "numéro sim", "sim number", "sim", "n° sim", "n°sim",
            "numero telephone", "numéro téléphone", "tel", "telephone", "phone", "mobile",
            "portable", "gsm", "n° tel", "n°_tel", "contact", "numero contact", "sim numero",
            "sim numéro", "numero tel", "numéro tel",
        ),
    ),
    FieldSpec(
        name="sim_owner",
        value_type=ValueType.TEXT,
        asset_kinds=_TELECOM,
        synonyms=(
            "nom", "name", "proprietaire sim", "propriétaire sim", "sim owner", "owner",
            "propriétaire", "proprietaire", "utilisateur", "user", "client", "customer",
            "titulaire", "holder",
        ),
        min_fuzzy_confidence=0.9,
        rejected_header_tokens=("check",),
    ),
    FieldSpec(
        name="provider",
        value_type=ValueType.TEXT,
        asset_kinds=_TELECOM,
        synonyms=(
            "fournisseur", "provider", "operateur", "opérateur", "operator", "agence",
            "agence commerciale", "commercial", "bureau", "office", "company", "societe",
            "société",
        ),
    ),
    FieldSpec(
        name="zone",
        value_type=ValueType.TEXT,
        asset_kinds=_TELECOM,
        synonyms=(
            "zone", "ville", "city", "town", "municipality", "municipalite", "region",
            "région", "area", "secteur",
        ),
    ),
    FieldSpec(
        name="subscription_type",
        value_type=ValueType.TEXT,
        asset_kinds=_TELECOM,
        synonyms=(
            "type abonnement", "subscription type", "type subscription", "abonnement",
            "subscription", "plan", "forfait", "package",
        ),
    ),
    FieldSpec(
        name="data_plan",
        value_type=ValueType.TEXT,
        asset_kinds=_TELECOM,
        synonyms=(
            "plan donnees", "plan données", "data plan", "dataplan", "forfait donnees",
            "forfait données", "data package", "package donnees",
        ),
    ),
    FieldSpec(
        name="pin_code",
        value_type=ValueType.TEXT,
        asset_kinds=_TELECOM,
        synonyms=("code pin", "pin", "pin code", "code pin sim", "pin sim"),
    ),
    FieldSpec(
        name="puk_code",
        value_type=ValueType.TEXT,
        asset_kinds=_TELECOM,
        synonyms=("code puk", "puk", "puk code", "code puk sim", "puk sim"),
    ),
)

DEFAULT_FIELD_CATALOG = FieldCatalog(DEFAULT_FIELD_SPECS)

# Substrings that mark a spreadsheet row as the column header row.
HEADER_KEYWORDS: tuple[str, ...] = (
    "nom", "tel", "ville", "departement", "agence", "device", "serial", "brand",
    "id", "owner", "model", "ram", "disk", "processor", "operating", "status",
    "created", "name", "type", "phone", "city", "department",
)
