from orbitui.stylesheet import (
    CssProperty,
    CssSelector,
    Specificity,
    StyleError,
    StyleRule,
    Stylesheet,
    calculate_specificity,
)


def _rule(selector, scoped=True, order=0):
    return StyleRule([CssSelector(selector, [])], scoped, order)


def test_specificity_calculation():
    assert _rule("#main .header h1").specificity == Specificity(1, 1, 1)
    assert _rule(".button.primary:hover").specificity == Specificity(0, 3, 0)


def test_css_parsing():
    css = """
            .button {
                background-color: blue;
                color: white;
            }

            .button:hover {
                background-color: darkblue;
            }
        """
    stylesheet = Stylesheet.parse(css, True)
    assert len(stylesheet.rules) == 2
    first = stylesheet.rules[0]
    assert first.selectors[0].selector == ".button"
    assert len(first.selectors[0].properties) == 2
    assert first.scoped
    assert first.selectors[0].properties[0] == CssProperty("background-color", "blue")
    assert stylesheet.rules[1].source_order == 1


def test_scoping():
    rule = _rule(".button")
    rule.apply_scoping("component-123")
    assert rule.selectors[0].selector == ".component-123 .button"
    assert rule.specificity == Specificity(0, 2, 0)


def test_scoping_ignored_when_not_scoped():
    rule = _rule(".button", scoped=False)
    rule.apply_scoping("component-123")
    assert rule.selectors[0].selector == ".button"
    assert rule.specificity == Specificity(0, 1, 0)


def test_multiple_selectors():
    css = """
            h1, h2, h3 {
                font-family: sans-serif;
            }

            .alert, .notice {
                padding: 1rem;
                border: 1px solid;
            }
        """
    stylesheet = Stylesheet.parse(css, False)
    assert len(stylesheet.rules) == 2
    assert len(stylesheet.rules[0].selectors) == 3
    second = stylesheet.rules[1]
    assert len(second.selectors) == 2
    assert len(second.selectors[0].properties) == 2
    assert [s.selector for s in second.selectors] == [".alert", ".notice"]


def test_specificity_takes_most_specific_selector():
    rule = StyleRule([CssSelector("h1"), CssSelector("#id")], False, 0)
    assert rule.specificity == Specificity(1, 0, 0)


def test_empty_selectors_have_zero_specificity():
    assert StyleRule([], False, 0).specificity == Specificity(0, 0, 0)


def test_pseudo_element_and_attribute_specificity():
    assert calculate_specificity("p::before") == Specificity(0, 1, 2)
    assert calculate_specificity("a[href]") == Specificity(0, 1, 1)


def test_specificity_ordering():
    assert Specificity(1, 0, 0) > Specificity(0, 9, 9)
    assert Specificity(0, 1, 0) > Specificity(0, 0, 5)


def test_comments_and_multi_colon_lines_skipped():
    css = """
    /* header styles */
    .a {
        color: red;
        background: url(http://x);
    }
    """
    sheet = Stylesheet.parse(css, False)
    assert len(sheet.rules) == 1
    assert sheet.rules[0].selectors[0].properties == [CssProperty("color", "red")]


def test_properties_outside_rule_ignored():
    sheet = Stylesheet.parse("color: red;\n.a {\n}\n", False)
    assert len(sheet.rules) == 1
    assert sheet.rules[0].selectors[0].properties == []


def test_display_output():
    sheet = Stylesheet.parse(".a, .b {\n color: red;\n}\n", True)
    assert str(sheet) == (
        ".a /* scoped */ {\n  color: red;\n}\n\n"
        ".b /* scoped */ {\n  color: red;\n}\n\n"
    )


def test_add_rule():
    sheet = Stylesheet()
    sheet.add_rule(_rule("h1"))
    assert [r.selectors[0].selector for r in sheet.rules] == ["h1"]


def test_style_error_message():
    err = StyleError("bad")
    assert isinstance(err, Exception)
    assert str(err) == "Error parsing CSS: bad"