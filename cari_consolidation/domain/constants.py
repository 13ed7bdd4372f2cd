"""Domain constants for cari consolidation."""

from cari_consolidation.domain.models.companies import Company

DEFAULT_COMPANIES = (
    Company(company_id="VERI", name="VERİ YAZILIM A.Ş.", cloud_db="218"),
    Company(company_id="CLOUD", name="CLOUD LABS A.Ş.", cloud_db="7040"),
    Company(company_id="ETYA", name="ETYA RESEARCH A.Ş.", cloud_db="6391"),
    Company(company_id="BTT", name="BTT TEKNOLOJİ A.Ş.", cloud_db="256"),
    Company(
        company_id="MARKA",
        name="MARKA MUTFAĞI A.Ş.",
        cloud_db="4165",
        database="MARKAMUTFAGI",
    ),
    Company(company_id="KERZZBV", name="Kerzz B.V.", cloud_db=None),
)

QUICK_RANGE_PRESETS = (
    "today",
    "yesterday",
    "thisWeek",
    "lastWeek",
    "thisMonth",
    "lastMonth",
)


__all__ = ["DEFAULT_COMPANIES", "QUICK_RANGE_PRESETS"]
