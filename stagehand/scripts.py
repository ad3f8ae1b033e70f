"""Browser-side scripts that carry out observed actions on a page."""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional

from stagehand.types.page import ObserveResult

_XPATH_PREFIX = "xpath="
_OVERLAY_CLASS = "stagehand-observe-overlay"


class UnsupportedActionError(ValueError):
    """Raised when an action or selector cannot be handled locally."""


def _js_literal(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _ascii_lower(text: str) -> str:
    return "".join(ch.lower() if "A" <= ch <= "Z" else ch for ch in text)


def _lines(*parts: str) -> str:
    return "\n".join(parts)


def _indent(text: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line if line else line for line in text.splitlines())


def ensure_xpath(selector: str) -> str:
    """Return the XPath expression of an ``xpath=`` selector."""
    if not selector.startswith(_XPATH_PREFIX):
        raise UnsupportedActionError("local handlers currently require xpath selectors")
    return selector[len(_XPATH_PREFIX):]


def build_xpath_script(xpath: str, body: str) -> str:
    """Wrap ``body`` in a function that binds ``el`` to the node at ``xpath``."""
    lookup = (
        f"  const el = document.evaluate({_js_literal(xpath)}, document, null,"
        " XPathResult.FIRST_ORDERED_NODE_TYPE, null).singleNodeValue;"
    )
    return _lines(
        "(function() {",
        lookup,
        "  if (!el) throw new Error('Element not found for xpath');",
        _indent(body),
        "})()",
    )


def click_script(selector: str) -> str:
    """Script that clicks the selected element."""
    return build_xpath_script(ensure_xpath(selector), "el.click(); return true;")


def scroll_into_view_script(selector: str) -> str:
    """Script that scrolls the selected element into the centre of the view."""
    body = _lines(
        "el.scrollIntoView({ behavior: 'smooth', block: 'center', inline: 'center' });",
        "return true;",
    )
    return build_xpath_script(ensure_xpath(selector), body)


def _scroll_percentage_body(percent_literal: str) -> str:
    return _lines(
        f"const raw = {percent_literal};",
        "const clamp = (n) => Math.max(0, Math.min(n, 100));",
        "const parsed = typeof raw === 'number'"
        " ? raw : parseFloat(String(raw).trim().replace('%', ''));",
        "const pct = Number.isNaN(parsed) ? 0 : clamp(parsed);",
        "const tag = (el.tagName || '').toLowerCase();",
        "if (tag === 'html' || tag === 'body') {",
        "  const span = Math.max(document.body.scrollHeight - window.innerHeight, 0);",
        "  window.scrollTo({ top: span * pct / 100, left: window.scrollX, behavior: 'smooth' });",
        "} else {",
        "  const span = Math.max(el.scrollHeight - el.clientHeight, 0);",
        "  el.scrollTo({ top: span * pct / 100, left: el.scrollLeft, behavior: 'smooth' });",
        "}",
        "return true;",
    )


def scroll_to_percentage_script(selector: str, percentage: Optional[str]) -> str:
    """Script that scrolls the element (or page) to a vertical percentage."""
    xpath = ensure_xpath(selector)
    percent = "0" if percentage is None else percentage
    return build_xpath_script(xpath, _scroll_percentage_body(_js_literal(percent)))


def scroll_chunk_script(selector: str, direction: int) -> str:
    """Script that scrolls one visible height in ``direction`` (1 or -1)."""
    xpath = ensure_xpath(selector)
    body = _lines(
        f"const direction = {int(direction)};",
        "const tag = (el.tagName || '').toLowerCase();",
        "const isRoot = tag === 'html' || tag === 'body';",
        "const height = isRoot ? window.innerHeight : el.clientHeight;",
        "(isRoot ? window : el).scrollBy({ top: height * direction, left: 0, behavior: 'smooth' });",
        "return true;",
    )
    return build_xpath_script(xpath, body)


def fill_script(selector: str, text: str) -> str:
    """Script that sets the element's value and fires input and change events."""
    xpath = ensure_xpath(selector)
    body = _lines(
        f"const value = {_js_literal(text)};",
        "el.focus();",
        "if ('value' in el) el.value = value;",
        "for (const kind of ['input', 'change']) {",
        "  el.dispatchEvent(new Event(kind, { bubbles: true }));",
        "}",
        "return true;",
    )
    return build_xpath_script(xpath, body)


def press_key_script(selector: str, key: str) -> str:
    """Script that focuses the element and sends a key down and up."""
    xpath = ensure_xpath(selector)
    body = _lines(
        f"const keyValue = {_js_literal(key)};",
        "el.focus();",
        "for (const kind of ['keydown', 'keyup']) {",
        "  el.dispatchEvent(new KeyboardEvent(kind, { key: keyValue, bubbles: true, cancelable: true }));",
        "}",
        "return true;",
    )
    return build_xpath_script(xpath, body)


def select_option_script(selector: str, value: str) -> str:
    """Script that picks the option of a ``<select>`` matching value or text."""
    xpath = ensure_xpath(selector)
    body = _lines(
        f"const desired = {_js_literal(value)};",
        "if ((el.tagName || '').toLowerCase() !== 'select') {",
        "  throw new Error('Target is not a <select> element');",
        "}",
        "const chosen = Array.from(el.options)",
        "  .find((opt) => opt.value === desired || opt.text === desired);",
        "if (!chosen && desired) throw new Error('No matching option for value');",
        "if (chosen) el.value = chosen.value;",
        "for (const kind of ['input', 'change']) {",
        "  el.dispatchEvent(new Event(kind, { bubbles: true }));",
        "}",
        "return true;",
    )
    return build_xpath_script(xpath, body)


def _first_argument(result: ObserveResult) -> Optional[str]:
    return result.arguments[0] if result.arguments else None


def build_action_script(result: ObserveResult) -> str:
    """Choose and build the script that performs an observed action."""
    method = _ascii_lower((result.method or "click").strip())
    selector = result.selector
    argument = _first_argument(result)

    if method == "click":
        return click_script(selector)
    if method == "scrollintoview":
        return scroll_into_view_script(selector)
    if method in ("scroll", "scrollto", "mouse.wheel"):
        return scroll_to_percentage_script(selector, argument)
    if method == "nextchunk":
        return scroll_chunk_script(selector, 1)
    if method == "prevchunk":
        return scroll_chunk_script(selector, -1)
    if method in ("fill", "type"):
        return fill_script(selector, argument or "")
    if method == "press":
        return press_key_script(selector, argument or "")
    if method == "selectoptionfromdropdown":
        return select_option_script(selector, argument or "")
    if method == "not-supported":
        raise UnsupportedActionError("ObserveResult method is not supported in local mode")
    raise UnsupportedActionError("local observe result method not supported")


_OVERLAY_FUNCTION = _lines(
    "(function(elementsJson) {",
    f"  const overlayClass = '{_OVERLAY_CLASS}';",
    "  const clear = () => document.querySelectorAll('.' + overlayClass)"
    ".forEach((node) => node.remove());",
    "  const locate = (selector) => {",
    "    if (selector.startsWith('xpath=')) {",
    "      return document.evaluate(selector.slice(6), document, null,"
    " XPathResult.FIRST_ORDERED_NODE_TYPE, null).singleNodeValue;",
    "    }",
    "    return document.querySelector(selector);",
    "  };",
    "  try {",
    "    const elements = JSON.parse(elementsJson || '[]');",
    "    clear();",
    "    if (!Array.isArray(elements) || elements.length === 0) return true;",
    "    const container = document.createElement('div');",
    "    container.className = overlayClass;",
    "    Object.assign(container.style, {",
    "      position: 'fixed', top: '0', left: '0', width: '100%', height: '100%',",
    "      pointerEvents: 'none', zIndex: '999999',",
    "    });",
    "    document.body.appendChild(container);",
    "    elements.forEach((element, index) => {",
    "      const selector = element && element.selector ? String(element.selector) : '';",
    "      const target = selector ? locate(selector) : null;",
    "      if (!(target instanceof Element)) return;",
    "      const rect = target.getBoundingClientRect();",
    "      const box = document.createElement('div');",
    "      Object.assign(box.style, {",
    "        position: 'absolute',",
    "        left: rect.left + 'px', top: rect.top + 'px',",
    "        width: rect.width + 'px', height: rect.height + 'px',",
    "        border: '2px solid #ff4d4f', backgroundColor: 'rgba(255, 77, 79, 0.15)',",
    "        boxSizing: 'border-box', pointerEvents: 'none',",
    "      });",
    "      const label = document.createElement('div');",
    "      label.textContent = String(index + 1);",
    "      Object.assign(label.style, {",
    "        position: 'absolute', left: '0', top: '-20px',",
    "        backgroundColor: '#ff4d4f', color: '#fff', padding: '2px 4px',",
    "        fontSize: '12px', borderRadius: '3px',",
    "      });",
    "      box.appendChild(label);",
    "      container.appendChild(box);",
    "    });",
    "    setTimeout(clear, 5000);",
    "  } catch (error) {",
    "    console.error('Stagehand overlay error', error);",
    "  }",
    "  return true;",
)


def observe_overlay_script(results: Iterable[ObserveResult]) -> str:
    """Script that outlines and numbers each observed element for five seconds."""
    payload = _js_literal([result.to_dict() for result in results])
    return _OVERLAY_FUNCTION + "\n})(" + payload + ");"