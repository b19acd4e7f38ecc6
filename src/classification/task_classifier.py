from typing import Iterable, List, Mapping, Sequence, Tuple

from extraction.keywords import TASK_INDICATORS, TASK_TYPE_KEYWORDS

DEFAULT_TASK_TYPE = "homework"


class TaskClassifier:
    """Keyword classifier for diary lines.

    Matching is plain substring containment with no word boundaries, so
    "label" counts as "lab" and "bread" counts as "read".
    """

    def __init__(
        self,
        indicators: Iterable[str] = TASK_INDICATORS,
        type_keywords: Mapping[str, Tuple[str, ...]] = TASK_TYPE_KEYWORDS,
    ):
        self.indicators = tuple(indicators)
        self.type_keywords = type_keywords

    def is_task_line(self, line: str) -> bool:
        lower_line = line.lower()
        return any(indicator in lower_line for indicator in self.indicators)

    def extract_task_type(self, line: str) -> str:
        lower_line = line.lower()
        for task_type, keywords in self.type_keywords.items():
            if any(keyword in lower_line for keyword in keywords):
                return task_type
        return DEFAULT_TASK_TYPE

    def classify(self, lines: Sequence[str]) -> List[Tuple[int, str]]:
        """Keep the lines that describe an actionable task, with their positions.

        Positions refer to ``lines`` so callers can number tasks by the line
        they came from rather than by their rank among task lines.
        """
        return [(index, line) for index, line in enumerate(lines) if self.is_task_line(line)]
