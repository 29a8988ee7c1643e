"""LinkedIn geo URNs, supported interface locales and account currency constraints.

LinkedIn targets interface locales, and only core locales exist: regional
English variants (en_GB, en_CA, en_AU) are served as en_US. Most ad accounts are
USD-only whatever geography they target, so any other currency is flagged.
"""

from types import MappingProxyType

from pydantic import BaseModel

from src.models.budget import LinkedInTargetingValidation
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.budget.linkedin_geo")

FALLBACK_LOCALE = "en_US"
ACCOUNT_CURRENCY = "USD"
# Countries whose requested English locale is served as en_US
ENGLISH_SPEAKING = frozenset({"GB", "CA", "AU"})


class LinkedInGeo(BaseModel):
    """One targetable country."""

    model_config = {"frozen": True}

    country: str
    name: str
    geo_urn: str
    supported_currencies: tuple[str, ...] = (ACCOUNT_CURRENCY,)
    supported_locales: tuple[str, ...] = (FALLBACK_LOCALE,)


LINKEDIN_GEO_MAPPINGS = MappingProxyType({
    "US": LinkedInGeo(country="US", name="United States", geo_urn="urn:li:geo:103644278"),
    "GB": LinkedInGeo(country="GB", name="United Kingdom", geo_urn="urn:li:geo:101165590"),
    "CA": LinkedInGeo(country="CA", name="Canada", geo_urn="urn:li:geo:101174742"),
    "AU": LinkedInGeo(country="AU", name="Australia", geo_urn="urn:li:geo:101452733"),
    "DE": LinkedInGeo(
        country="DE",
        name="Germany",
        geo_urn="urn:li:geo:101282230",
        supported_locales=("de_DE", "en_US"),
    ),
    "FR": LinkedInGeo(
        country="FR",
        name="France",
        geo_urn="urn:li:geo:105015875",
        supported_locales=("fr_FR", "en_US"),
    ),
})
DEFAULT_GEO = LINKEDIN_GEO_MAPPINGS["US"]

# Languages with their own LinkedIn interface locale
NATIVE_LOCALES = MappingProxyType({"de": "de_DE", "fr": "fr_FR"})


def get_geo(country: str) -> LinkedInGeo:
    return LINKEDIN_GEO_MAPPINGS.get((country or "").upper(), DEFAULT_GEO)


def get_geo_urn(country: str) -> str:
    return get_geo(country).geo_urn


def get_supported_locale(country: str, language: str) -> str:
    """``de_DE`` / ``fr_FR`` where the country supports them, ``en_US`` otherwise."""
    mapping = LINKEDIN_GEO_MAPPINGS.get((country or "").upper())
    if mapping is None:
        return FALLBACK_LOCALE
    native = NATIVE_LOCALES.get((language or "").lower())
    if native and native in mapping.supported_locales:
        return native
    return FALLBACK_LOCALE


def is_currency_supported(currency: str, country: str) -> bool:
    return (currency or "").upper() in get_geo(country).supported_currencies


def split_locale(locale: str) -> dict[str, str]:
    """``en_US`` -> ``{"language": "en", "country": "US"}`` (campaign ``locale`` payload shape)."""
    language, _, country = locale.partition("_")
    return {"country": country, "language": language}


def validate_linkedin_targeting(country: str, language: str, currency: str) -> LinkedInTargetingValidation:
    """Corrected geo URN and locale plus warnings for unsupported combinations.

    Advisory only: ``is_valid`` is False when anything had to be adjusted.
    """
    country = (country or "").upper()
    language = (language or "en").lower()
    warnings: list[str] = []
    geo_urn = get_geo_urn(country)
    locale = get_supported_locale(country, language)

    suggested_currency = None
    if not is_currency_supported(currency, country):
        suggested_currency = ACCOUNT_CURRENCY
        warnings.append(
            "Most LinkedIn ad accounts use USD currency. If campaign creation fails with "
            "currency mismatch, the account is likely USD-only."
        )

    requested_locale = f"{language}_{country}"
    if locale != requested_locale:
        if country in ENGLISH_SPEAKING:
            warnings.append(
                f"LinkedIn doesn't support {requested_locale} locale. Using {locale} for targeting "
                "(English-speaking countries use en_US)."
            )
        else:
            warnings.append(f"Locale adjusted from {requested_locale} to {locale} (LinkedIn supported locale).")

    if warnings:
        logger.info("linkedin_geo.adjusted", country=country, locale=locale, warnings=len(warnings))
    return LinkedInTargetingValidation(
        is_valid=not warnings,
        geo_urn=geo_urn,
        locale=locale,
        suggested_currency=suggested_currency,
        warnings=warnings,
    )
