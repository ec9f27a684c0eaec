from invoke import task


@task
def test(ctx):
    ctx.run("pytest --cov=rulelink --cov-fail-under=80", echo=True)


@task
def validate(ctx):
    """validate"""
    ctx.run("pyflakes ./src", echo=True)
    ctx.run("pyflakes ./tests", echo=True)
    ctx.run("black --check --diff  --verbose .", echo=True)

    ctx.run("pylint ./src", warn=True, echo=True)
    ctx.run("pylint ./tests", warn=True, echo=True)

    ctx.run("mypy ./src", echo=True)
    ctx.run("mypy ./tests", echo=True)


@task
def link(ctx, target):
    """mirror the rules for TARGET into it"""
    ctx.run(f"mirror-linker {target}", echo=True)


@task
def fmt(ctx):
    ctx.run("black .")
