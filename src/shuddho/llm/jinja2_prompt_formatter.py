from importlib import resources
from typing import Any, NoReturn

import jinja2


def jinja2_raise(message: str) -> NoReturn:
    """Available in templates as ``fail(message)``."""
    raise jinja2.TemplateRuntimeError(message)


class PromptRenderer:
    _environment = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        autoescape=False,
    )
    _environment.globals["fail"] = jinja2_raise

    @classmethod
    def render(cls, template: str, context: dict[str, Any]) -> str:
        return cls._environment.from_string(template).render(**context)

    @classmethod
    def render_resource(cls, name: str, context: dict[str, Any]) -> str:
        """Render a template shipped in ``shuddho.resources``."""
        template = resources.files("shuddho.resources").joinpath(name).read_text(encoding="utf-8")
        return cls.render(template, context).strip()
