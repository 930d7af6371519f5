"""Built-in CLI sub-commands for docs2skill.

* :mod:`~docs2skill.commands.generate` -- generate and save a skill from
  a documentation URL.
* :mod:`~docs2skill.commands.key` -- save and show the API key.
* :mod:`~docs2skill.commands.config` -- view and modify global settings.

``generate`` is a plain callback registered directly on the root app; the
multi-command groups export a :class:`typer.Typer` sub-application.
"""
