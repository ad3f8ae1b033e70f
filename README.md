# stagehand

Building blocks for AI-driven browser automation built around three verbs:
**observe** a page, **act** on an element, and **extract** structured data.

The package provides:

- `stagehand.types` — typed models for accessibility trees (`AxNode`,
  `AccessibilityNode`, `TreeResult`), agent actions and results (`AgentAction`,
  `AgentResult`, `ClickAction`, ...), chat messages (`ChatMessage`, `ChatRole`)
  and page operations (`ActOptions`, `ObserveResult`, `ExtractOptions`, ...).
  Each model converts to and from the JSON-shaped dictionaries used on the wire
  with `to_dict()` / `from_dict()`.
- `stagehand.observe` — the response format requested from the model during
  observation, parsing of its answer (`parse_observe_elements`), `%NAME%`
  variable substitution and self-heal command construction.
- `stagehand.extraction` — replacing element ids with their URLs
  (`inject_urls`), JSON Schema validation and camelCase-to-snake_case key
  normalisation used to coerce extracted data (`coerce_extract_data`).
- `stagehand.scripts` — JavaScript snippets that perform clicks, fills, key
  presses, scrolling and dropdown selection on an XPath-addressed element, and
  the overlay that highlights observed elements.

## Installation

```
pip install .
```

## Example

```python
from stagehand.types.page import ObserveResult
from stagehand.observe import substitute_variables
from stagehand.scripts import build_action_script
from stagehand.extraction import coerce_extract_data

result = ObserveResult(
    selector="xpath=/html/body/form/input",
    description="type the e-mail address",
    method="fill",
    arguments=substitute_variables(["%EMAIL%"], {"EMAIL": "someone@example.com"}),
)
script = build_action_script(result)   # JavaScript to run in the page

schema = {
    "type": "object",
    "properties": {"company_name": {"type": "string"}},
    "required": ["company_name"],
}
data = coerce_extract_data({"companyName": "Example"}, schema, None)
# {'company_name': 'Example'}
```

Selectors passed to the script builders must be XPath selectors of the form
`xpath=...`; anything else raises `UnsupportedActionError`.

## Running the tests

```
pip install .[test]
pytest
```