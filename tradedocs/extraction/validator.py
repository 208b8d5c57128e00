"""Required-field presence checks over an assembled structured result."""

from typing import Any

from tradedocs.extraction.models import DocumentType, StructuredResult, ValidationResult

# Dotted paths rooted at section names.
REQUIRED_FIELDS: dict[DocumentType, tuple[str, ...]] = {
    DocumentType.SWIFT: (
        "header.transaction_reference",
        "header.amount",
        "header.currency",
        "header.beneficiary.name",
    ),
    DocumentType.DI: (
        "header.numero_DI",
        "header.data_registro_DI",
        "header.VMLD_usd",
        "items",
    ),
    DocumentType.NUMERARIO: (
        "diInfo.invoice_number",
        "header.numero_nf",
        "header.valor_total_nota",
        "items",
    ),
    DocumentType.NOTA_FISCAL: (
        "header.numero_nf",
        "header.data_emissao",
        "header.valor_total_nota",
        "items",
    ),
    DocumentType.COMMERCIAL_INVOICE: (
        "header.invoice_number",
        "header.invoice_date",
        "header.total_amount_usd",
        "header.shipper_company",
        "items",
    ),
    DocumentType.PROFORMA_INVOICE: (
        "header.invoice_number",
        "header.date",
        "header.contracted_company",
        "items",
    ),
    DocumentType.PACKING_LIST: (
        "header.invoice",
        "header.consignee",
        "header.total_gw",
        "containers",
        "items",
    ),
}

_MISSING = object()


def required_fields(document_type: str) -> tuple[str, ...]:
    mapped = DocumentType.parse(document_type)
    if mapped is None:
        return ()
    return REQUIRED_FIELDS[mapped]


def validate_required_fields(
    document_type: str,
    structured_result: StructuredResult,
) -> ValidationResult:
    """Report required fields that are absent, null or empty strings."""
    data = structured_result.section_data()
    missing = [
        path for path in required_fields(document_type) if _is_blank(_resolve(data, path))
    ]
    return ValidationResult(is_valid=not missing, missing_fields=missing)


def _resolve(data: Any, path: str) -> Any:
    current = data
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _is_blank(value: Any) -> bool:
    return value is _MISSING or value is None or value == ""
