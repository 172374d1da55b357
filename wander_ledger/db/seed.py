"""Static reference data: currencies and the mock USD-based rate table.

The currency rows are immutable reference data. `MOCK_RATES` is the table the
rate layer starts from when nothing has been persisted yet, and the base the
mock refresh provider perturbs. Only `rate` is listed; inverse rates are
always derived as 1/rate.
"""

from __future__ import annotations
from typing import Dict, FrozenSet, List

CURRENCY_ROWS: List[Dict[str, object]] = [
    # Major currencies
    {"code": "USD", "name": "US Dollar", "symbol": "$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇺🇸", "country": "United States"},
    {"code": "EUR", "name": "Euro", "symbol": "€", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇪🇺", "country": "European Union"},
    {"code": "GBP", "name": "British Pound", "symbol": "£", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇬🇧", "country": "United Kingdom"},
    {"code": "JPY", "name": "Japanese Yen", "symbol": "¥", "symbol_position": "before", "decimal_places": 0, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇯🇵", "country": "Japan"},
    {"code": "CNY", "name": "Chinese Yuan", "symbol": "¥", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇨🇳", "country": "China"},
    {"code": "AUD", "name": "Australian Dollar", "symbol": "A$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇦🇺", "country": "Australia"},
    {"code": "CAD", "name": "Canadian Dollar", "symbol": "C$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇨🇦", "country": "Canada"},
    {"code": "CHF", "name": "Swiss Franc", "symbol": "CHF", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": "'", "flag": "🇨🇭", "country": "Switzerland"},
    # Asia
    {"code": "HKD", "name": "Hong Kong Dollar", "symbol": "HK$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇭🇰", "country": "Hong Kong"},
    {"code": "SGD", "name": "Singapore Dollar", "symbol": "S$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇸🇬", "country": "Singapore"},
    {"code": "KRW", "name": "South Korean Won", "symbol": "₩", "symbol_position": "before", "decimal_places": 0, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇰🇷", "country": "South Korea"},
    {"code": "THB", "name": "Thai Baht", "symbol": "฿", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇹🇭", "country": "Thailand"},
    {"code": "MYR", "name": "Malaysian Ringgit", "symbol": "RM", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇲🇾", "country": "Malaysia"},
    {"code": "IDR", "name": "Indonesian Rupiah", "symbol": "Rp", "symbol_position": "before", "decimal_places": 0, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇮🇩", "country": "Indonesia"},
    {"code": "PHP", "name": "Philippine Peso", "symbol": "₱", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇵🇭", "country": "Philippines"},
    {"code": "VND", "name": "Vietnamese Dong", "symbol": "₫", "symbol_position": "after", "decimal_places": 0, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇻🇳", "country": "Vietnam"},
    {"code": "TWD", "name": "Taiwan Dollar", "symbol": "NT$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇹🇼", "country": "Taiwan"},
    {"code": "INR", "name": "Indian Rupee", "symbol": "₹", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇮🇳", "country": "India"},
    # Europe
    {"code": "SEK", "name": "Swedish Krona", "symbol": "kr", "symbol_position": "after", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": " ", "flag": "🇸🇪", "country": "Sweden"},
    {"code": "NOK", "name": "Norwegian Krone", "symbol": "kr", "symbol_position": "after", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": " ", "flag": "🇳🇴", "country": "Norway"},
    {"code": "DKK", "name": "Danish Krone", "symbol": "kr", "symbol_position": "after", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇩🇰", "country": "Denmark"},
    {"code": "PLN", "name": "Polish Zloty", "symbol": "zł", "symbol_position": "after", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": " ", "flag": "🇵🇱", "country": "Poland"},
    {"code": "CZK", "name": "Czech Koruna", "symbol": "Kč", "symbol_position": "after", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": " ", "flag": "🇨🇿", "country": "Czech Republic"},
    {"code": "HUF", "name": "Hungarian Forint", "symbol": "Ft", "symbol_position": "after", "decimal_places": 0, "decimal_separator": ",", "thousands_separator": " ", "flag": "🇭🇺", "country": "Hungary"},
    {"code": "TRY", "name": "Turkish Lira", "symbol": "₺", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇹🇷", "country": "Turkey"},
    {"code": "RUB", "name": "Russian Ruble", "symbol": "₽", "symbol_position": "after", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": " ", "flag": "🇷🇺", "country": "Russia"},
    # Americas
    {"code": "MXN", "name": "Mexican Peso", "symbol": "$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇲🇽", "country": "Mexico"},
    {"code": "BRL", "name": "Brazilian Real", "symbol": "R$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇧🇷", "country": "Brazil"},
    {"code": "ARS", "name": "Argentine Peso", "symbol": "$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇦🇷", "country": "Argentina"},
    {"code": "CLP", "name": "Chilean Peso", "symbol": "$", "symbol_position": "before", "decimal_places": 0, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇨🇱", "country": "Chile"},
    {"code": "COP", "name": "Colombian Peso", "symbol": "$", "symbol_position": "before", "decimal_places": 0, "decimal_separator": ",", "thousands_separator": ".", "flag": "🇨🇴", "country": "Colombia"},
    {"code": "PEN", "name": "Peruvian Sol", "symbol": "S/", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇵🇪", "country": "Peru"},
    # Oceania
    {"code": "NZD", "name": "New Zealand Dollar", "symbol": "NZ$", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇳🇿", "country": "New Zealand"},
    # Middle East & Africa
    {"code": "ZAR", "name": "South African Rand", "symbol": "R", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇿🇦", "country": "South Africa"},
    {"code": "ILS", "name": "Israeli Shekel", "symbol": "₪", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇮🇱", "country": "Israel"},
    {"code": "AED", "name": "UAE Dirham", "symbol": "د.إ", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇦🇪", "country": "United Arab Emirates"},
    {"code": "SAR", "name": "Saudi Riyal", "symbol": "﷼", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇸🇦", "country": "Saudi Arabia"},
    {"code": "EGP", "name": "Egyptian Pound", "symbol": "E£", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇪🇬", "country": "Egypt"},
    {"code": "MAD", "name": "Moroccan Dirham", "symbol": "د.م.", "symbol_position": "after", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇲🇦", "country": "Morocco"},
    {"code": "NGN", "name": "Nigerian Naira", "symbol": "₦", "symbol_position": "before", "decimal_places": 2, "decimal_separator": ".", "thousands_separator": ",", "flag": "🇳🇬", "country": "Nigeria"},
]

CURRENCY_CODES: FrozenSet[str] = frozenset(str(row["code"]) for row in CURRENCY_ROWS)

# Units of quote currency per 1 USD.
MOCK_RATES: Dict[str, float] = {
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 149.50,
    "CNY": 7.24,
    "AUD": 1.53,
    "CAD": 1.36,
    "CHF": 0.88,
    "HKD": 7.82,
    "SGD": 1.34,
    "KRW": 1320,
    "THB": 35.50,
    "MYR": 4.72,
    "IDR": 15750,
    "PHP": 55.80,
    "VND": 24500,
    "TWD": 31.50,
    "INR": 83.20,
    "SEK": 10.45,
    "NOK": 10.65,
    "DKK": 6.88,
    "PLN": 4.02,
    "CZK": 23.20,
    "HUF": 358,
    "TRY": 32.50,
    "RUB": 92.50,
    "MXN": 17.15,
    "BRL": 4.97,
    "ARS": 875,
    "CLP": 925,
    "COP": 3950,
    "PEN": 3.72,
    "NZD": 1.64,
    "ZAR": 18.75,
    "ILS": 3.67,
    "AED": 3.67,
    "SAR": 3.75,
    "EGP": 30.90,
    "MAD": 10.05,
    "NGN": 1550,
}
MOCK_RATES_BASE = "USD"
