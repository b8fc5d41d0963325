# core/schema.py
import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, List, Optional, Tuple, Type, Union
from pydantic import BaseModel, Field, ValidationError, create_model
from config.settings import settings
from model.classification import Citation
from util.constants import NOT_REPORTED
from util.enums import Cardinality
from util.errors import SchemaViolation
from util.functions import collapse_ws, join_tokens, split_tokens

_SEPARATOR_NAMES = {",": "commas", ";": "semicolons"}
_NOT_REPORTED_ALIASES = frozenset(
    {"nr", "n/r", "not reported", "not reported (nr)", "none reported", "not stated", "none"}
)
# "245", "N = 245", "n=1,024", "245 participants"
_NUMERIC = re.compile(r"^(?:n\s*=\s*)?(\d{1,3}(?:,\d{3})+|\d+)(?:\s+[a-z][a-z\s-]*)?$", re.I)
_QUOTES = "\"'`“”‘’"


@dataclass(frozen=True)
class Category:
    token: str
    definition: str


@dataclass(frozen=True)
class ClassificationSchema:
    """
    Declarative definition of one metadata dimension.

    The category tuple is the single source for both the vocabulary listing in
    the instruction text and the validator's allowed-token set.
    """

    field_name: str
    label: str
    task: str
    cardinality: Cardinality
    output_description: str
    categories: Tuple[Category, ...] = ()
    not_reported: str = NOT_REPORTED
    not_reported_definition: str = "Not reported / no information provided."
    separator: Optional[str] = None
    preamble: Optional[str] = None
    rules: Tuple[str, ...] = ()
    _lookup: Dict[str, str] = field(default_factory=dict, init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        if self.cardinality in (Cardinality.MULTI, Cardinality.FREE_TEXT_MULTI) and not self.separator:
            raise ValueError(f"{self.field_name}: multi-value dimensions need a separator")
        if self.cardinality in (Cardinality.SINGLE, Cardinality.MULTI) and not self.categories:
            raise ValueError(f"{self.field_name}: enum dimensions need categories")
        self._lookup.update({t.casefold(): t for t in self.tokens})

    # ---------------- Vocabulary ----------------

    @property
    def has_vocabulary(self) -> bool:
        return self.cardinality in (Cardinality.SINGLE, Cardinality.MULTI)

    @property
    def tokens(self) -> Tuple[str, ...]:
        own = tuple(c.token for c in self.categories)
        return own if self.not_reported in own else own + (self.not_reported,)

    @property
    def listed_categories(self) -> Tuple[Category, ...]:
        if any(c.token == self.not_reported for c in self.categories):
            return self.categories
        return self.categories + (Category(self.not_reported, self.not_reported_definition),)

    # ---------------- Instruction text ----------------

    def _cardinality_rules(self) -> List[str]:
        sep = self.separator or ","
        sep_name = _SEPARATOR_NAMES.get(sep, f"'{sep}'")
        if self.cardinality == Cardinality.SINGLE:
            return [
                "Choose only one category from the list above.",
                "Respond with only the category name.",
            ]
        if self.cardinality == Cardinality.MULTI:
            return [
                "Choose all that apply from the list above.",
                f"Respond with only the category names separated by {sep_name} ({sep}) if multiple.",
            ]
        if self.cardinality == Cardinality.FREE_TEXT_MULTI:
            return [
                "If there is only one, write it once.",
                f"If there are multiple, separate them with {sep_name} ({sep}).",
            ]
        if self.cardinality == Cardinality.NUMERIC:
            return ["Provide only the numeric value (digits only, no words)."]
        return ["Answer with a short phrase."]

    def render_instructions(self) -> str:
        """
        Dimension-specific part of the prompt: task, vocabulary listing and rules.
        """
        lines: List[str] = [f"Your task is to {self.task}", ""]
        if self.preamble:
            lines += [self.preamble, ""]
        if self.has_vocabulary:
            lines.append("Categories:")
            lines += [f'- "{c.token}": {c.definition}' for c in self.listed_categories]
            lines.append("")
        lines.append("Rules:")
        lines += [f"- {r}" for r in self._cardinality_rules() + list(self.rules)]
        lines.append(
            f"- If the information is not reported in the paper, respond with {self.not_reported}."
        )
        lines += ["", f"Respond with your answer in the '{self.field_name}' field."]
        return "\n".join(lines)

    def render_prompt(self, corpus_text: str) -> str:
        return (
            f"{self.render_instructions()}\n\n"
            f"{settings.CITATION_DIRECTIVE}\n"
            f"Paper Content:\n{corpus_text}\n"
        )

    # ---------------- Output contract ----------------

    @property
    def tool_name(self) -> str:
        return f"record_{self.field_name}"

    def output_schema(self) -> Dict[str, Any]:
        """
        JSON schema of the two-field output object declared to the model.
        """
        value: Dict[str, Any] = {"type": "string", "description": self.output_description}
        if self.cardinality == Cardinality.SINGLE:
            value["enum"] = list(self.tokens)
        elif self.cardinality == Cardinality.MULTI:
            value["description"] += (
                f" One or more of {', '.join(self.tokens)}, separated by '{self.separator}'."
            )
        elif self.cardinality == Cardinality.NUMERIC:
            value["description"] += f" Digits only, or {self.not_reported}."
        return {
            "type": "object",
            "properties": {
                self.field_name: value,
                "sources": citations_json_schema(),
            },
            "required": [self.field_name, "sources"],
        }

    @cached_property
    def output_model(self) -> Type[BaseModel]:
        return create_model(
            f"{self.field_name[0].upper()}{self.field_name[1:]}Output",
            **{
                self.field_name: (Union[str, int], Field(...)),
                "sources": (List[Citation], Field(...)),
            },
        )

    def parse_output(self, raw: Any) -> Tuple[Union[str, int], List[Citation]]:
        """
        Structural check of the model output. Raises SchemaViolation.
        """
        if not isinstance(raw, dict):
            raise SchemaViolation(f"{self.field_name}: output is not an object")
        try:
            parsed = self.output_model.model_validate(raw)
        except ValidationError as e:
            fields = ",".join(".".join(str(x) for x in err.get("loc", ())) for err in e.errors())
            raise SchemaViolation(f"{self.field_name}: malformed output ({fields})") from e
        return getattr(parsed, self.field_name), list(parsed.sources)

    # ---------------- Value validation ----------------

    def is_not_reported(self, text: str) -> bool:
        folded = text.strip(_QUOTES + " .").casefold()
        return folded == self.not_reported.casefold() or folded in _NOT_REPORTED_ALIASES

    def _match(self, token: str) -> str:
        found = self._lookup.get(token.strip(_QUOTES + " .").casefold())
        if found is None:
            raise SchemaViolation(
                f"{self.field_name}: '{token}' is not one of {', '.join(self.tokens)}"
            )
        return found

    def coerce(self, raw: Union[str, int, None]) -> str:
        """
        Validate a raw value against the dimension and return its canonical form.

        Raises SchemaViolation for anything outside the dimension's legal shapes.
        """
        if isinstance(raw, bool) or raw is None:
            raise SchemaViolation(f"{self.field_name}: missing value")
        if isinstance(raw, int):
            if self.cardinality != Cardinality.NUMERIC or raw < 0:
                raise SchemaViolation(f"{self.field_name}: unexpected number {raw}")
            return str(raw)

        text = collapse_ws(raw)
        if not text:
            raise SchemaViolation(f"{self.field_name}: empty value")
        if self.is_not_reported(text):
            return self.not_reported

        if self.cardinality == Cardinality.SINGLE:
            return self._match(text)

        if self.cardinality == Cardinality.NUMERIC:
            m = _NUMERIC.match(text.strip(_QUOTES + " ."))
            if not m:
                raise SchemaViolation(f"{self.field_name}: '{text}' is not a number")
            return m.group(1).replace(",", "")

        if self.cardinality == Cardinality.FREE_TEXT:
            return text

        tokens = split_tokens(text, self.separator)
        if self.cardinality == Cardinality.MULTI:
            tokens = [self._match(t) for t in tokens]
        else:
            tokens = [self.not_reported if self.is_not_reported(t) else t for t in tokens]
        if not tokens:
            raise SchemaViolation(f"{self.field_name}: empty value")

        seen = set()
        unique: List[str] = []
        for t in tokens:
            if t.casefold() not in seen:
                seen.add(t.casefold())
                unique.append(t)
        if self.not_reported in unique and len(unique) > 1:
            raise SchemaViolation(
                f"{self.field_name}: {self.not_reported} combined with other values"
            )
        return join_tokens(unique, self.separator)


def citations_json_schema() -> Dict[str, Any]:
    return {
        "type": "array",
        "description": "A list of sources (page and text) used to justify the answer.",
        "items": {
            "type": "object",
            "properties": {
                "page": {
                    "type": "integer",
                    "description": Citation.model_fields["page"].description,
                },
                "text": {
                    "type": "string",
                    "description": Citation.model_fields["text"].description,
                },
            },
        },
    }
