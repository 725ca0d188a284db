"""HTML templates for the generated examples site."""

from __future__ import annotations

import html
from string import Template

EXAMPLE_PAGE = Template(
    """
<!doctype html>
<!--
Copyright 2018 The Go Authors. All rights reserved.
Use of this source code is governed by a BSD-style
license that can be found in the LICENSE file.
-->
<html>

<head>
        <meta charset="utf-8">
        <title>$title</title>
</head>

<body>
        <!--
        Add the following polyfill for Microsoft Edge 17/18 support:
        <script src="https://cdn.jsdelivr.net/npm/text-encoding@0.7.0/lib/encoding.min.js"></script>
        (see https://caniuse.com/#feat=textencoder)
        -->
        <script src="$bootstrap"></script>
        <script>
                if (!WebAssembly.instantiateStreaming) { // polyfill
                        WebAssembly.instantiateStreaming = async (resp, importObject) => {
                                const source = await (await resp).arrayBuffer();
                                return await WebAssembly.instantiate(source, importObject);
                        };
                }

                const go = new Go();
                let mod, inst;
                WebAssembly.instantiateStreaming(fetch("$src"), go.importObject).then((result) => {
                        mod = result.module;
                        inst = result.instance;
                        document.getElementById("runButton").disabled = false;
                }).catch((err) => {
                        console.error(err);
                });

                async function run() {
                        console.clear();
                        await go.run(inst);
                        inst = await WebAssembly.instantiate(mod, go.importObject); // reset instance
                }
        </script>

        <button onClick="run();" id="runButton" disabled>Run</button>
</body>

</html>
"""
)

INDEX_HEADER = Template(
    """
<!doctype html>
<html>
<head>
        <meta charset="utf-8">
        <title>Go-P5</title>
</head>

<body>
<h2>Welcome to the Go-P5 examples page (version=$revision)</h2>
This page shows a few <code>go-p5</code> examples, compiled to <code>WASM</code>.

<ul>
"""
)

INDEX_FOOTER = """
</ul>
</body>

</html>
"""


def render_example_page(title: str, src: str, bootstrap: str) -> str:
    return EXAMPLE_PAGE.substitute(
        title=html.escape(title),
        src=src,
        bootstrap=bootstrap,
    )


def render_index_item(href: str, name: str) -> str:
    return f'<li><a href="{html.escape(href)}">{html.escape(name)}</a></li>\n'


def render_index(revision: str, items: list[str]) -> str:
    return INDEX_HEADER.substitute(revision=html.escape(revision)) + "".join(items) + INDEX_FOOTER
