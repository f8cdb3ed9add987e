"""Artifact extraction from TypeScript source text."""

from template_navigator.indexing import ArtifactKind, extract_artifacts, split_selector
from template_navigator.indexing.extractor import ArtifactExtractor

from conftest import CURRENCY_PIPE, HIGHLIGHT_DIRECTIVE, component_source


def _by_name(artifacts):
    return {artifact.name: artifact for artifact in artifacts}


class TestComponentExtraction:

    def test_selector_list_yields_one_artifact_per_token(self):
        artifacts = extract_artifacts(component_source("a, [b], c"))

        assert [a.name for a in artifacts] == ["a", "b", "c"]
        assert all(a.kind is ArtifactKind.COMPONENT for a in artifacts)

    def test_all_quote_styles_are_accepted(self):
        for quote in ("'", '"', "`"):
            source = f"@Component({{ selector: {quote}app-x{quote} }})\nclass X {{}}"
            assert [a.name for a in extract_artifacts(source)] == ["app-x"]

    def test_component_wins_over_directive(self):
        source = (
            "@Directive({ selector: '[unused]' })\nclass D {}\n"
            "@Component({ selector: 'app-both' })\nclass C {}\n"
        )
        artifacts = _by_name(extract_artifacts(source))

        # Only the first selector property is read, and it is classified as a component
        assert artifacts["unused"].kind is ArtifactKind.COMPONENT

    def test_directive_attribute_selectors_lose_brackets(self):
        artifacts = _by_name(extract_artifacts(HIGHLIGHT_DIRECTIVE))

        assert set(artifacts) == {"appHighlight", "appHighlightAlt"}
        assert artifacts["appHighlight"].kind is ArtifactKind.DIRECTIVE

    def test_origin_is_recorded(self):
        artifacts = extract_artifacts(component_source("app-x"), origin="src/x.component.ts")

        assert artifacts[0].origin == "src/x.component.ts"

    def test_computed_selector_is_not_detected(self):
        source = "const SELECTOR = 'app-x';\n@Component({ selector: SELECTOR })\nclass X {}"

        assert extract_artifacts(source) == []

    def test_selector_without_decorator_is_ignored(self):
        assert extract_artifacts("export const cfg = { selector: 'app-x' };") == []


class TestPipeExtraction:

    def test_pipe_name_is_extracted(self):
        artifacts = extract_artifacts(CURRENCY_PIPE)

        assert len(artifacts) == 1
        assert artifacts[0].name == "currencyCode"
        assert artifacts[0].kind is ArtifactKind.PIPE

    def test_pipe_name_is_trimmed_but_brackets_kept(self):
        artifacts = extract_artifacts("@Pipe({ name: ' [odd] ' })\nclass P {}")

        assert artifacts[0].name == "[odd]"

    def test_component_and_pipe_in_one_file(self):
        source = "@Component({ selector: 'app-x' })\nclass C {}\n@Pipe({ name: 'shout' })\nclass P {}"
        artifacts = _by_name(extract_artifacts(source))

        assert artifacts["app-x"].kind is ArtifactKind.COMPONENT
        assert artifacts["shout"].kind is ArtifactKind.PIPE


class TestMalformedInput:

    def test_empty_text(self):
        assert extract_artifacts("") == []

    def test_unclosed_decorator(self):
        assert extract_artifacts("@Component({ selector: 'app-x'") == []

    def test_unterminated_selector_string(self):
        assert extract_artifacts("@Component({ selector: 'app-x })") == []

    def test_extractor_instance_matches_function(self):
        source = component_source("app-x, app-y")
        assert ArtifactExtractor().extract(source) == extract_artifacts(source)


def test_split_selector_drops_empty_tokens():
    assert split_selector(" a ,, [b] ,") == ["a", "b"]
