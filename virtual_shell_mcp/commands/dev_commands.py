"""Simulated development toolchain: VCS, interpreters, compilers, package managers."""

from typing import override

from virtual_shell_mcp.models.result import CommandResult

from . import canned
from .base import Command, CommandContext, split_flags

NO_SUCH_FILE = "No such file or directory"


class GitCommand(Command):
    """
    `clone` materializes a small repository in the CWD; every other supported
    subcommand answers with fixed text.
    """

    @override
    def get_name(self) -> str:
        return "git"

    @override
    def get_description(self) -> str:
        return "Git version control"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        if not args:
            return context.ok(canned.GIT_USAGE)

        subcommand, subargs = args[0], args[1:]
        if subcommand != "clone":
            return context.respond(canned.git_subcommand(subcommand, context.cwd), name)

        _, operands = split_flags(subargs)
        if not operands:
            return context.fail(
                "fatal: You must specify a repository to clone.", "Missing repository URL"
            )
        url = operands[0]
        directory = operands[1] if len(operands) > 1 else canned.repository_name(url)
        repo_path = context.resolve(directory)
        if context.store.exists(repo_path):
            return context.fail(
                f"fatal: destination path '{directory}' already exists and is not an empty directory.",
                "Destination path already exists",
            )
        return context.respond(canned.git_clone(url, repo_path), name)


class PythonCommand(Command):
    @override
    def get_name(self) -> str:
        return "python"

    @override
    def get_aliases(self) -> list[str]:
        return ["python3"]

    @override
    def get_description(self) -> str:
        return "Python interpreter"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if not operands:
            return context.ok(canned.PYTHON_BANNER)

        filename = operands[0]
        node = context.store.get(context.resolve(filename))
        if node is None:
            return context.fail(
                f"{name}: can't open file '{filename}': [Errno 2] {NO_SUCH_FILE}", "File not found"
            )
        if node.is_dir:
            return context.fail(
                f"{name}: can't open file '{filename}': [Errno 21] Is a directory", "Is a directory"
            )
        return context.respond(canned.python_run(filename), name)


class NodeCommand(Command):
    @override
    def get_name(self) -> str:
        return "node"

    @override
    def get_aliases(self) -> list[str]:
        return ["nodejs"]

    @override
    def get_description(self) -> str:
        return "Node.js runtime"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if not operands:
            return context.ok(canned.NODE_BANNER)

        filename = operands[0]
        node = context.store.get(context.resolve(filename))
        if node is None or node.is_dir:
            return context.fail(f"{name}: can't open file '{filename}'", "File not found")
        return context.respond(canned.node_run(filename), name)


class JavaCommand(Command):
    """Runs a compiled class (`<Name>.class` in the CWD), a source file or a jar."""

    @override
    def get_name(self) -> str:
        return "java"

    @override
    def get_description(self) -> str:
        return "Java runtime"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        if "-jar" in args:
            index = args.index("-jar")
            jar = args[index + 1] if index + 1 < len(args) else None
            if jar is None or not context.store.exists(context.resolve(jar)):
                return context.fail(f"Error: Unable to access jarfile {jar or ''}".rstrip(), "File not found")
            return context.respond(canned.java_run(jar), name)

        _, operands = split_flags(args)
        if not operands:
            return context.ok(canned.JAVA_USAGE)

        target = operands[0]
        if target.endswith(".java"):
            compiled = target
        else:
            compiled = target.removesuffix(".class") + ".class"
        node = context.store.get(context.resolve(compiled))
        if node is None or node.is_dir:
            return context.fail(
                f"Error: Could not find or load main class {target}", "Class not found"
            )
        return context.respond(canned.java_run(target.removesuffix(".class")), name)


class JavacCommand(Command):
    """Compiles `X.java` into a placeholder `X.class` next to it."""

    @override
    def get_name(self) -> str:
        return "javac"

    @override
    def get_description(self) -> str:
        return "Java compiler"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if not operands:
            return context.ok(canned.JAVAC_USAGE)

        filename = operands[0]
        node = context.store.get(context.resolve(filename))
        if node is None or node.is_dir or not filename.endswith(".java"):
            return context.fail(f"javac: file not found: {filename}", "File not found")

        class_path = context.resolve(filename.removesuffix(".java") + ".class")
        return context.respond(canned.javac_compile(filename, class_path), name)


class GccCommand(Command):
    """Compiles a C/C++ source into a placeholder executable (`a.out` or `-o <name>`)."""

    @override
    def get_name(self) -> str:
        return "gcc"

    @override
    def get_aliases(self) -> list[str]:
        return ["g++"]

    @override
    def get_description(self) -> str:
        return "C/C++ compiler"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        output_name = "a.out"
        sources = []
        tokens = iter(args)
        for token in tokens:
            if token == "-o":
                output_name = next(tokens, output_name)
            elif not token.startswith("-"):
                sources.append(token)

        if not sources:
            return context.fail(
                f"{name}: fatal error: no input files\ncompilation terminated.", "No input files"
            )

        source = sources[0]
        node = context.store.get(context.resolve(source))
        if node is None or node.is_dir:
            return context.fail(f"{name}: error: {source}: {NO_SUCH_FILE}", "File not found")

        output_path = context.resolve(output_name)
        return context.respond(canned.gcc_compile(source, output_name, output_path), name)


class MakeCommand(Command):
    @override
    def get_name(self) -> str:
        return "make"

    @override
    def get_description(self) -> str:
        return "Build automation"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        return context.respond(canned.make_build(context.cwd), name)


class NpmCommand(Command):
    @override
    def get_name(self) -> str:
        return "npm"

    @override
    def get_description(self) -> str:
        return "Node package manager"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        return context.respond(canned.npm(args), name)


class PipCommand(Command):
    @override
    def get_name(self) -> str:
        return "pip"

    @override
    def get_aliases(self) -> list[str]:
        return ["pip3"]

    @override
    def get_description(self) -> str:
        return "Python package manager"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        return context.respond(canned.pip(args), name)
