"""nodegen -- Node.js application scaffolding generator.

Copies a framework template, configures optional add-ons (database, mail,
authentication, CSS), writes ``package.json`` and installs dependencies.

Quick usage::

    import asyncio
    from nodegen.config import Config
    from nodegen.pipeline import Pipeline

    state = asyncio.run(
        Pipeline(Config()).run("my-api", "express", {"database": "postgres"})
    )
"""

__version__ = "1.0.0"
