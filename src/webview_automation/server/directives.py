"""JavaScript directives sent to the page bridge.

Each directive is a self-contained async IIFE. It never throws into the
host: a missing bridge or a failing command is reported to the page
console. Every directive ends with ``void 0`` so hosts that return the
value of the last expression do not hold on to the promise.
"""

from __future__ import annotations

import json
from typing import Any

DEFAULT_BRIDGE = "__WEBVIEW_AUTOMATION__"


def _js_literal(value: Any) -> str:
    """Render ``value`` as a JSON literal safe to embed in a script."""
    text = json.dumps(value, ensure_ascii=False)
    return text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def execute_directive(
    command: str,
    args: Any,
    request_id: str | None = None,
    bridge: str = DEFAULT_BRIDGE,
) -> str:
    """Build the script that runs ``bridge.execute(command, args)``.

    The outcome is kept on ``bridge._lastResult``. With a ``request_id`` it
    is also handed to ``bridge.reportResult`` when the page defines one.
    """
    report = ""
    if request_id is not None:
        report = f"""
    if (typeof bridge.reportResult === 'function') {{
        try {{
            await bridge.reportResult(Object.assign({{ id: {_js_literal(request_id)} }}, outcome));
        }} catch (e) {{
            console.error('[Automation] Failed to report result:', e);
        }}
    }}"""

    return f"""(async function() {{
    const bridge = window.{bridge};
    if (typeof bridge === 'undefined') {{
        console.error('[Automation] Not initialized');
        return;
    }}
    let outcome;
    try {{
        const result = await bridge.execute({_js_literal(command)}, {_js_literal(args)});
        outcome = {{ success: true, result: result === undefined ? null : result }};
    }} catch (e) {{
        outcome = {{ success: false, error: (e && e.message) || String(e) }};
    }}
    bridge._lastResult = outcome;{report}
}})();
void 0;
"""


def capture_directive(bridge: str = DEFAULT_BRIDGE) -> str:
    """Build the script that runs ``bridge.captureAndSend()``."""
    return f"""(async function() {{
    const bridge = window.{bridge};
    if (typeof bridge === 'undefined') {{
        console.error('[Automation] Not initialized');
        return;
    }}
    try {{
        await bridge.captureAndSend();
    }} catch (e) {{
        console.error('[Automation] Screenshot failed:', e);
    }}
}})();
void 0;
"""
