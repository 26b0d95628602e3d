"""
The jinja2 environment used to generate glsl. Blocks are written as
``{$ ... $}`` and line statements start with ``$$``, so that they do not
clash with the braces of glsl code.
"""

import jinja2


root_loader = jinja2.PrefixLoader({}, delimiter=".")

jinja_env = jinja2.Environment(
    block_start_string="{$",
    block_end_string="$}",
    variable_start_string="{{",
    variable_end_string="}}",
    line_statement_prefix="$$",
    undefined=jinja2.StrictUndefined,
    loader=root_loader,
)


def register_glsl_loader(context, loader):
    """Register a source for shader snippets.

    When code is encountered that looks like::

       {$ include 'some_context.name.glsl' $}

    The loader for "some_context" is looked up and used to load the glsl to include.
    This function allows registering a loader for your downstream package or application.

    Parameters
    ----------
    context : str
        The context of the loader.
    loader: jinja2.BaseLoader | callable | dict
        The loader to use for this context. If a function is given, it must accept one
        positional argument (the name to include).
    """
    if not (isinstance(context, str) and "." not in context):
        raise TypeError("Glsl load context must be a string without dots.")
    if context in root_loader.mapping:
        raise RuntimeError(f"A loader is already registered for '{context}'.")
    if isinstance(loader, jinja2.BaseLoader):
        root_loader.mapping[context] = loader
    elif isinstance(loader, dict):
        root_loader.mapping[context] = jinja2.DictLoader(loader)
    elif callable(loader):
        root_loader.mapping[context] = jinja2.FunctionLoader(loader)
    else:
        raise TypeError(
            f"The given glsl loader must be a jinja2.BaseLoader, function, or dict. Not {loader!r}"
        )


register_glsl_loader("glint", jinja2.PackageLoader("glint.glsl", "."))


def apply_templating(code, **kwargs):
    """Render the given template code with the given variables."""
    t = jinja_env.from_string(code)
    try:
        return t.render(**kwargs)
    except jinja2.UndefinedError as err:
        raise ValueError(f"Cannot compose shader: {err.args[0]}") from None
