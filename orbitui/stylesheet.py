"""CSS stylesheets: selectors, specificity, scoping and a line-based parser."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Specificity:
    """Selector specificity as (ids, classes/attributes/pseudo-classes, elements)."""

    a: int = 0
    b: int = 0
    c: int = 0


@dataclass(frozen=True)
class CssProperty:
    """A single ``name: value`` declaration."""

    name: str
    value: str


@dataclass
class CssSelector:
    """A selector together with the declarations that apply to it."""

    selector: str
    properties: list[CssProperty] = field(default_factory=list)


class StyleError(Exception):
    """Raised when CSS cannot be parsed or interpreted."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Error parsing CSS: {message}")
        self.message = message


def calculate_specificity(selector: str) -> Specificity:
    """Compute the specificity of a selector.

    IDs count towards ``a``; classes, attributes and pseudo-classes towards
    ``b``; elements and pseudo-elements towards ``c``.
    """
    a = b = c = 0
    for part in selector.split(" "):
        pseudo_elements = part.count("::")
        a += part.count("#")
        b += part.count(".") + part.count("[") + part.count(":") - pseudo_elements
        if not part.startswith((".", "#", "[")):
            c += 1
        c += pseudo_elements
    return Specificity(a, b, c)


@dataclass
class StyleRule:
    """A rule with one or more selectors, its specificity and source position."""

    selectors: list[CssSelector]
    scoped: bool = False
    source_order: int = 0
    specificity: Specificity = field(init=False)

    def __post_init__(self) -> None:
        self.specificity = max(
            (calculate_specificity(s.selector) for s in self.selectors),
            default=Specificity(0, 0, 0),
        )

    def apply_scoping(self, component_id: str) -> None:
        """Prefix each selector with the component's scoping class, if scoped."""
        if not self.scoped:
            return
        for selector in self.selectors:
            selector.selector = f".{component_id} {selector.selector}"
            self.specificity = calculate_specificity(selector.selector)


@dataclass
class Stylesheet:
    """An ordered collection of style rules."""

    rules: list[StyleRule] = field(default_factory=list)

    def add_rule(self, rule: StyleRule) -> None:
        """Append a rule."""
        self.rules.append(rule)

    @classmethod
    def parse(cls, css: str, scoped: bool) -> "Stylesheet":
        """Parse CSS text where selectors, declarations and closing braces sit on separate lines."""
        stylesheet = cls()
        selectors: list[str] = []
        properties: list[CssProperty] = []
        in_rule = False
        source_order = 0

        for raw_line in css.split("\n"):
            line = raw_line.strip()
            if not line or line.startswith("/*"):
                continue

            if "{" in line:
                in_rule = True
                head = line.split("{", 1)[0]
                selectors = [part.strip() for part in head.split(",")]
            elif "}" in line:
                in_rule = False
                if selectors:
                    rule = StyleRule(
                        [CssSelector(text, list(properties)) for text in selectors],
                        scoped,
                        source_order,
                    )
                    stylesheet.add_rule(rule)
                    source_order += 1
                selectors = []
                properties = []
            elif in_rule and ":" in line:
                parts = line.split(":")
                if len(parts) == 2:
                    name, value = parts
                    properties.append(
                        CssProperty(name.strip(), value.strip().rstrip(";"))
                    )

        return stylesheet

    def __str__(self) -> str:
        chunks: list[str] = []
        for rule in self.rules:
            for selector in rule.selectors:
                chunks.append(selector.selector)
                if rule.scoped:
                    chunks.append(" /* scoped */")
                chunks.append(" {\n")
                for prop in selector.properties:
                    chunks.append(f"  {prop.name}: {prop.value};\n")
                chunks.append("}\n\n")
        return "".join(chunks)