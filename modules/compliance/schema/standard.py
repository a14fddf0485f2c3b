"""
Canonical Celerya standard for supplier product spec sheets.

Defines every tracked data point once, grouped by section. The standard is
immutable at runtime: tenants customise it by toggling ``active`` on the
fields of a schema built from it (see ``get_default_schema``).
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping

from modules.compliance.schema.models import SchemaField, Section


class FieldPriority(str, Enum):
    """Priority classification of a standard field (informational only)"""
    CRITICAL = "Critica"
    MANDATORY = "Obbligatoria"
    IMPORTANT = "Importante"
    RECOMMENDED = "Raccomandata"


@dataclass(frozen=True)
class FieldDefinition:
    label: str
    mandatory: bool
    critical: bool
    priority: FieldPriority


@dataclass(frozen=True)
class SectionDefinition:
    title: str
    fields: Mapping[str, FieldDefinition]


def _field(label: str, mandatory: bool, critical: bool, priority: FieldPriority) -> FieldDefinition:
    return FieldDefinition(label=label, mandatory=mandatory, critical=critical, priority=priority)


_P = FieldPriority

STANDARD_SECTIONS: Mapping[str, SectionDefinition] = MappingProxyType({
    "identificazione": SectionDefinition(
        title="Identificazione",
        fields=MappingProxyType({
            "produttore": _field("Produttore", True, False, _P.MANDATORY),
            "logo": _field("Logo", False, False, _P.RECOMMENDED),
            "denominazioneScheda": _field("Denominazione scheda", True, False, _P.MANDATORY),
            "codiceProdotto": _field("Codice prodotto", True, False, _P.MANDATORY),
            "dataRedazione": _field("Data redazione", True, False, _P.MANDATORY),
            "numeroRevisione": _field("Numero revisione", True, False, _P.MANDATORY),
        }),
    ),
    "descrizione": SectionDefinition(
        title="Descrizione",
        fields=MappingProxyType({
            "denominazioneLegale": _field("Denominazione legale", True, False, _P.MANDATORY),
            "ingredienti": _field("Ingredienti", True, False, _P.MANDATORY),
            "allergeni": _field("Allergeni", True, True, _P.CRITICAL),
            "descrizioneProdotto": _field("Descrizione prodotto", True, False, _P.MANDATORY),
            "proprietaSensoriali": _field("Proprietà sensoriali", False, False, _P.RECOMMENDED),
        }),
    ),
    "nutrizionale": SectionDefinition(
        title="Nutrizionale & Chimico-fisico",
        fields=MappingProxyType({
            "energia": _field("Energia", True, False, _P.MANDATORY),
            "proteine": _field("Proteine", True, False, _P.MANDATORY),
            "grassi": _field("Grassi", True, False, _P.MANDATORY),
            "carboidrati": _field("Carboidrati", True, False, _P.MANDATORY),
            "sale": _field("Sale", True, False, _P.MANDATORY),
            "ph": _field("pH", False, False, _P.RECOMMENDED),
            "aw": _field("aw", False, False, _P.RECOMMENDED),
            "umidita": _field("Umidità", False, False, _P.RECOMMENDED),
            "residuiAdditivi": _field("Residui/Additivi", True, True, _P.CRITICAL),
        }),
    ),
    "sicurezza": SectionDefinition(
        title="Sicurezza & Microbiologia",
        fields=MappingProxyType({
            "listeria": _field("Listeria", True, True, _P.CRITICAL),
            "salmonella": _field("Salmonella", True, True, _P.CRITICAL),
            "eColi": _field("E.coli", True, True, _P.CRITICAL),
            "enterobacteriaceae": _field("Enterobacteriaceae", False, False, _P.IMPORTANT),
            "stafilococchi": _field("Stafilococchi", False, False, _P.IMPORTANT),
            "limitiContaminanti": _field("Limiti contaminanti", True, True, _P.CRITICAL),
        }),
    ),
    "conservazione": SectionDefinition(
        title="Conservazione",
        fields=MappingProxyType({
            "tmcScadenza": _field("TMC/Scadenza", True, False, _P.MANDATORY),
            "condizioniStoccaggio": _field("Condizioni stoccaggio", True, False, _P.MANDATORY),
            "shelfLifePostApertura": _field("Shelf-life post-apertura", False, False, _P.RECOMMENDED),
            "modalitaUso": _field("Modalità d’uso", False, False, _P.IMPORTANT),
        }),
    ),
    "packaging": SectionDefinition(
        title="Packaging & Logistica",
        fields=MappingProxyType({
            "tipoImballaggio": _field("Tipo imballaggio", False, False, _P.IMPORTANT),
            "materiali": _field("Materiali", False, False, _P.IMPORTANT),
            "dimensioni": _field("Dimensioni", False, False, _P.IMPORTANT),
            "pesoNetto": _field("Peso netto", True, False, _P.MANDATORY),
            "pesoSgocciolato": _field("Peso sgocciolato", False, False, _P.MANDATORY),
            "composizionePallet": _field("Composizione pallet", False, False, _P.RECOMMENDED),
        }),
    ),
    "conformita": SectionDefinition(
        title="Conformità",
        fields=MappingProxyType({
            "normative": _field("Normative", True, False, _P.MANDATORY),
            "certificazioni": _field("Certificazioni", False, False, _P.IMPORTANT),
            "origineIngredienti": _field("Origine ingredienti", True, False, _P.MANDATORY),
        }),
    ),
})

# Only consulted when parsing stored schemas that predate per-field paths
STANDARD_LABEL_PATHS: Mapping[str, str] = MappingProxyType({
    definition.label: f"{section_id}.{field_id}"
    for section_id, section in STANDARD_SECTIONS.items()
    for field_id, definition in section.fields.items()
})


def get_default_schema() -> List[Section]:
    """
    Build the standard schema with every field active.

    Returns:
        Fresh list of sections; callers may mutate it freely.
    """
    return [
        Section(
            id=section_id,
            title=section.title,
            fields=[
                SchemaField(
                    name=definition.label,
                    mandatory=definition.mandatory,
                    critical=definition.critical,
                    active=True,
                    path=f"{section_id}.{field_id}",
                    priority=definition.priority.value,
                )
                for field_id, definition in section.fields.items()
            ],
        )
        for section_id, section in STANDARD_SECTIONS.items()
    ]


def flattened_headers() -> List[Dict[str, str]]:
    """
    Flatten the standard into one row per field for tabular exports.

    Returns:
        List of {"section": title, "field": label, "key": dotted path}
    """
    return [
        {
            "section": section.title,
            "field": definition.label,
            "key": f"{section_id}.{field_id}",
        }
        for section_id, section in STANDARD_SECTIONS.items()
        for field_id, definition in section.fields.items()
    ]
