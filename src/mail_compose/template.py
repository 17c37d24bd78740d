# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Rendering of Jinja2 templates into byte buffers.

A template set is a group of templates sharing one ``jinja2.Environment``.
Passing a name renders that member of the set through the environment's
loader; an empty name renders the template object itself.

Example:
    Rendering a named template from a set::

        env = Environment(loader=DictLoader({"greet": "Hello {{ name }}"}))
        base = env.get_template("greet")

        with bufpool.borrow() as buf:
            render_template(base, "greet", {"name": "Ada"}, buf)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import IO, Any

from jinja2 import Template

ENCODING = "utf-8"


def render_template(template: Template, name: str | None, data: Mapping[str, Any] | None, buf: IO[bytes]) -> None:
    """Render ``template`` (or its sibling ``name``) with ``data`` into ``buf``.

    Errors raised by Jinja2 (``TemplateNotFound``, ``UndefinedError``, ...)
    propagate unchanged.
    """
    if name:
        template = template.environment.get_template(name)
    for chunk in template.generate(data or {}):
        buf.write(chunk.encode(ENCODING))
