import logging

from rich.logging import RichHandler

from helmsman import App, FaultCode

__prog__ = "example-cli"

__docs__ = {
    FaultCode.MISSING_REQUIRED_OPTION: "every required option must be passed on the command line",
}

app = App("example-cli", "1.0.0", "A simple example CLI.", shell=True, colorful=True)
app.option("verbose", "bool", "v", descr="Print debug logs")


def _configure(context):
    if context.get("verbose"):
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])


@app.command("greet", "Greet someone") \
    .option("name", "string", "n", required=True, descr="Name to greet") \
    .option("greeting", "string", "g", default="Hello", descr="Greeting word") \
    .option("loud", "bool", "l", descr="Shout the greeting")
def greet(context):
    _configure(context)
    message = f"{context.take_string('greeting')}, {context.take_string('name')}!"
    if context.get("loud"):
        message = message.upper()
    context.console.print(message)


@app.command("calc", "Add or multiply two numbers") \
    .option("a", "number", required=True, descr="First operand") \
    .option("b", "number", required=True, descr="Second operand") \
    .option("op", "string", "o", default="add", choices=("add", "mul"), descr="Operation")
def calc(context):
    _configure(context)
    a, b = context.take_number("a"), context.take_number("b")
    if context.take_string("op") == "add":
        context.console.print(f"{a:g} + {b:g} = {a + b:g}")
    else:
        context.console.print(f"{a:g} * {b:g} = {a * b:g}")


@app.command("install", "Install packages") \
    .option("dev", "bool", "D", descr="Install as development dependencies") \
    .option("target", "string", "t", default="main", choices=("main", "app"), descr="Target manifest")
def install(context):
    _configure(context)
    kind = "dev " if context.get("dev") else ""
    for package in context.args:
        context.console.print(f"installing {kind}package {package} into {context.take_string('target')}")


if __name__ == '__main__':
    app.run()
