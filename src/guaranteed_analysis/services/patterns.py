"""Per-nutrient label patterns for guaranteed analysis text.

Each nutrient owns its own keyword list, ordered by locale priority (Dutch and
Italian first, then German, then English and French). Keywords are compiled
into a shared template so that every pattern captures the numeric literal in
group 1, tolerates an optional ``(min)``/``(max)`` qualifier, colons and dotted
leaders, and accepts both ``11.5`` and ``11,5``.

Text is case-folded before matching, so keywords are written in lowercase and
``ß`` is spelled ``ss``.
"""

import re
from collections.abc import Mapping
from types import MappingProxyType

from guaranteed_analysis.domain.nutrients import Nutrient

_QUALIFIER = r"(?:\s*\(?\s*(?:minimum|maximum|mind|min|max)\.?\s*\)?)?"
_LEADER = r"[\s:.\-]*"
_VALUE = r"(\d+(?:[.,]\d+)?)\s*%"

_KEYWORDS: dict[Nutrient, tuple[str, ...]] = {
    Nutrient.PROTEIN: (
        # nl / it
        r"eiwit(?:gehalte)?",
        r"ruw\s+eiwit",
        r"proteine(?:\s+grezze)?",
        r"proteina(?:\s+grezza)?",
        # de
        r"rohprotein",
        r"eiweiss",
        # en / fr
        r"(?:crude\s+)?protein",
        r"prot[ée]ines?(?:\s+brutes?)?",
        r"prot",
    ),
    Nutrient.FAT: (
        # nl / it
        r"vetgehalte",
        r"(?:ruw\s+)?vet",
        r"(?:tenore\s+in\s+)?materia\s+grassa",
        r"(?:oli\s+e\s+)?grassi(?:\s+grezzi)?",
        # de
        r"fettgehalt",
        r"rohfett",
        r"fett",
        # en / fr
        r"(?:crude\s+)?fat(?:\s+content)?",
        r"mati[èe]res?\s+grasses?(?:\s+brutes?)?",
    ),
    Nutrient.FIBER: (
        # nl / it
        r"vezel(?:stof)?(?:gehalte)?",
        r"ruwe\s+celstof",
        r"fibr[ae](?:\s+grezz[ae])?",
        # de
        r"rohfaser",
        r"faser",
        # en / fr
        r"(?:crude\s+)?fib(?:er|re)s?",
        r"cellulose(?:\s+brute)?",
    ),
    Nutrient.MOISTURE: (
        # nl / it
        r"vocht(?:gehalte)?",
        r"umidit[àa]",
        # de
        r"feuchtegehalt",
        r"feucht(?:e|igkeit)?",
        r"wasser(?:gehalt)?",
        # en / fr
        r"moisture",
        r"water",
        r"humidit[ée]",
    ),
    Nutrient.ASH: (
        # nl / it
        r"(?:ruwe\s+)?as",
        r"cener[ei](?:\s+grezze)?",
        r"sostanze\s+minerali",
        # de
        r"rohasche",
        r"asche",
        r"mineralstoffe",
        # en / fr
        r"(?:crude\s+)?ash",
        r"inorganic\s+matter",
        r"minerals?",
        r"cendres?(?:\s+brutes?)?",
    ),
}


def _compile(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{keyword}{_QUALIFIER}{_LEADER}{_VALUE}", re.IGNORECASE)


NUTRIENT_PATTERNS: Mapping[Nutrient, tuple[re.Pattern[str], ...]] = MappingProxyType(
    {
        nutrient: tuple(_compile(keyword) for keyword in keywords)
        for nutrient, keywords in _KEYWORDS.items()
    }
)


def patterns_for(nutrient: Nutrient) -> tuple[re.Pattern[str], ...]:
    """Return the ordered patterns for a nutrient."""
    return NUTRIENT_PATTERNS[nutrient]
