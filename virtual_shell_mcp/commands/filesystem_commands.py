"""Commands that navigate, query and mutate the virtual filesystem."""

from typing import override

from virtual_shell_mcp.models.node import FilesystemNode, NodeSpec, byte_size
from virtual_shell_mcp.models.result import CommandResult
from virtual_shell_mcp.utils.path_utils import is_descendant, parent_path

from .base import Command, CommandContext, split_flags

NO_SUCH_FILE = "No such file or directory"


def _format_date(node: FilesystemNode) -> str:
    stamp = node.updated_at
    return f"{stamp:%b} {stamp.day:>2} {stamp:%H:%M}"


def _long_line(node: FilesystemNode, owner: str, name: str | None = None) -> str:
    type_char = "d" if node.is_dir else "-"
    return (
        f"{type_char}{node.permissions[1:]} 1 {owner} {owner} "
        f"{node.size:>8} {_format_date(node)} {name or node.name}"
    )


def _aggregate(context: CommandContext, failures: list[str]) -> CommandResult:
    """Multi-operand commands succeed only if every operand did."""
    if failures:
        return context.fail("\n".join(failures), failures[0])
    return context.ok()


class PwdCommand(Command):
    @override
    def get_name(self) -> str:
        return "pwd"

    @override
    def get_description(self) -> str:
        return "Print working directory"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        return context.ok(context.cwd)


class LsCommand(Command):
    """
    Lists directory contents.

    The short format sorts names lexicographically. The long format keeps the
    store's iteration order (creation order), so the two views may differ.
    """

    @override
    def get_name(self) -> str:
        return "ls"

    @override
    def get_description(self) -> str:
        return "List directory contents"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        flags, operands = split_flags(args)
        show_all = "a" in flags
        long_format = "l" in flags

        target = operands[0] if operands else None
        path = context.resolve(target) if target else context.cwd
        node = context.store.get(path)
        if node is None:
            return context.fail(f"ls: cannot access '{target}': {NO_SUCH_FILE}", NO_SUCH_FILE)

        if not node.is_dir:
            if long_format:
                return context.ok(_long_line(node, context.user, name=target))
            return context.ok(target or node.name)

        children = context.store.list_children(path)
        if long_format:
            return context.ok(self._long_listing(context, node, children, show_all))

        names = sorted(child.name for child in children if show_all or not child.is_hidden)
        return context.ok("  ".join(names))

    def _long_listing(
        self,
        context: CommandContext,
        directory: FilesystemNode,
        children: list[FilesystemNode],
        show_all: bool,
    ) -> str:
        lines = [f"total {max(len(children) * 4, 12)}"]
        if show_all:
            lines.append(_long_line(directory, context.user, name="."))
            parent = context.store.get(parent_path(directory.path) or "/")
            if directory.path != "/" and parent is not None:
                lines.append(_long_line(parent, context.user, name=".."))
        for child in children:
            if not show_all and child.is_hidden:
                continue
            lines.append(_long_line(child, context.user))
        return "\n".join(lines)


class CdCommand(Command):
    @override
    def get_name(self) -> str:
        return "cd"

    @override
    def get_description(self) -> str:
        return "Change directory"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        raw = args[0] if args else "~"
        path = context.resolve(raw)
        node = context.store.get(path)
        if node is None:
            return context.fail(f"cd: no such file or directory: {raw}", NO_SUCH_FILE)
        if not node.is_dir:
            return context.fail(f"cd: not a directory: {raw}", "Not a directory")

        context.state.change_directory(path)
        return context.ok()


class MkdirCommand(Command):
    @override
    def get_name(self) -> str:
        return "mkdir"

    @override
    def get_description(self) -> str:
        return "Create directory"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        flags, operands = split_flags(args)
        if not operands:
            return context.fail("mkdir: missing operand", "Missing operand")

        make_parents = "p" in flags
        failures = []
        for raw in operands:
            path = context.resolve(raw)
            error = self._make_parents(context, path) if make_parents else self._make(context, path)
            if error:
                failures.append(f"mkdir: cannot create directory '{raw}': {error}")
        return _aggregate(context, failures)

    def _make(self, context: CommandContext, path: str) -> str | None:
        if context.store.exists(path):
            return "File exists"
        parent = context.store.get(parent_path(path) or "/")
        if parent is None:
            return NO_SUCH_FILE
        if not parent.is_dir:
            return "Not a directory"
        context.store.create(NodeSpec(path=path, kind="directory"))
        return None

    def _make_parents(self, context: CommandContext, path: str) -> str | None:
        # -p: create missing ancestors, accept existing directories.
        segments = path.strip("/").split("/") if path != "/" else []
        current = ""
        for segment in segments:
            current = f"{current}/{segment}"
            node = context.store.get(current)
            if node is None:
                context.store.create(NodeSpec(path=current, kind="directory"))
            elif not node.is_dir:
                return "Not a directory"
        return None


class TouchCommand(Command):
    """Creates empty files. An existing path is left untouched."""

    @override
    def get_name(self) -> str:
        return "touch"

    @override
    def get_description(self) -> str:
        return "Create file"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        if not args:
            return context.fail("touch: missing file operand", "Missing file operand")

        failures = []
        for raw in args:
            path = context.resolve(raw)
            if context.store.exists(path):
                continue
            parent = context.store.get(parent_path(path) or "/")
            if parent is None or not parent.is_dir:
                failures.append(f"touch: cannot touch '{raw}': {NO_SUCH_FILE}")
                continue
            context.store.create(NodeSpec(path=path, kind="file", content=""))
        return _aggregate(context, failures)


class CatCommand(Command):
    @override
    def get_name(self) -> str:
        return "cat"

    @override
    def get_description(self) -> str:
        return "Display file contents"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        if not args:
            return context.fail("cat: missing file operand", "Missing file operand")

        raw = args[0]
        node = context.store.get(context.resolve(raw))
        if node is None:
            return context.fail(f"cat: {raw}: {NO_SUCH_FILE}", NO_SUCH_FILE)
        if node.is_dir:
            return context.fail(f"cat: {raw}: Is a directory", "Is a directory")
        return context.ok(node.content or "")


class EchoCommand(Command):
    """
    Prints its arguments, or writes them to a file with `>` (overwrite) or `>>`
    (append). Double quotes are stripped; no other quoting is interpreted.
    """

    @override
    def get_name(self) -> str:
        return "echo"

    @override
    def get_description(self) -> str:
        return "Display text"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        redirect = next(
            (
                index
                for index, arg in enumerate(args)
                if arg in (">", ">>") and index < len(args) - 1
            ),
            None,
        )
        if redirect is None:
            return context.ok(" ".join(args).replace('"', ""))

        text = " ".join(args[:redirect]).replace('"', "")
        filename = args[redirect + 1]
        path = context.resolve(filename)

        existing = context.store.get(path)
        if existing is not None and existing.is_dir:
            return context.fail(f"bash: {filename}: Is a directory", "Is a directory")
        parent = context.store.get(parent_path(path) or "/")
        if parent is None or not parent.is_dir:
            return context.fail(f"bash: {filename}: {NO_SUCH_FILE}", NO_SUCH_FILE)

        if args[redirect] == ">>" and existing is not None and existing.content:
            text = f"{existing.content}\n{text}"
        context.store.create(NodeSpec(path=path, kind="file", content=text, size=byte_size(text)))
        return context.ok()


class RmCommand(Command):
    """
    Removes nodes.

    Without -r a non-empty directory is refused, so no descendant is ever
    orphaned; an empty directory is removed like a file. -f silences missing
    operands.
    """

    @override
    def get_name(self) -> str:
        return "rm"

    @override
    def get_description(self) -> str:
        return "Remove files"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        flags, operands = split_flags(args)
        if not operands:
            return context.fail("rm: missing operand", "Missing operand")

        recursive = bool(flags & {"r", "R"})
        force = "f" in flags
        failures = []
        for raw in operands:
            path = context.resolve(raw)
            node = context.store.get(path)
            if path == "/":
                failures.append("rm: it is dangerous to operate recursively on '/'")
                continue
            if node is None:
                if not force:
                    failures.append(f"rm: cannot remove '{raw}': {NO_SUCH_FILE}")
                continue
            if node.is_dir and not recursive and context.store.list_children(path):
                failures.append(f"rm: cannot remove '{raw}': Directory not empty")
                continue
            if not context.store.delete(path, recursive=recursive):
                failures.append(f"rm: cannot remove '{raw}': Operation failed")
        return _aggregate(context, failures)


class CpCommand(Command):
    @override
    def get_name(self) -> str:
        return "cp"

    @override
    def get_description(self) -> str:
        return "Copy files/directories"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        flags, operands = split_flags(args)
        if not operands:
            return context.fail("cp: missing file operand", "Missing operand")
        if len(operands) < 2:
            return context.fail(
                "cp: missing destination file operand after source", "Missing destination"
            )

        raw_source, raw_destination = operands[0], operands[1]
        source = context.resolve(raw_source)
        node = context.store.get(source)
        if node is None:
            return context.fail(f"cp: cannot stat '{raw_source}': {NO_SUCH_FILE}", NO_SUCH_FILE)
        if node.is_dir and not flags & {"r", "R"}:
            return context.fail(
                f"cp: -r not specified; omitting directory '{raw_source}'", "Is a directory"
            )

        destination = _into_directory(context, context.resolve(raw_destination), node)
        if destination == source:
            return context.fail(
                f"cp: '{raw_source}' and '{raw_destination}' are the same file", "Same file"
            )
        if is_descendant(destination, source):
            return context.fail(
                f"cp: cannot copy a directory, '{raw_source}', into itself, '{raw_destination}'",
                "Invalid argument",
            )
        error = _check_target(context, destination, node)
        if error:
            kind = "directory" if node.is_dir else "regular file"
            return context.fail(f"cp: cannot create {kind} '{raw_destination}': {error}", error)

        context.store.copy(source, destination, recursive=node.is_dir)
        return context.ok()


class MvCommand(Command):
    @override
    def get_name(self) -> str:
        return "mv"

    @override
    def get_description(self) -> str:
        return "Move/rename files"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        _, operands = split_flags(args)
        if not operands:
            return context.fail("mv: missing file operand", "Missing operand")
        if len(operands) < 2:
            return context.fail(
                "mv: missing destination file operand after source", "Missing destination"
            )

        raw_source, raw_destination = operands[0], operands[1]
        source = context.resolve(raw_source)
        node = context.store.get(source)
        if node is None:
            return context.fail(f"mv: cannot stat '{raw_source}': {NO_SUCH_FILE}", NO_SUCH_FILE)
        if source == "/":
            return context.fail(
                f"mv: cannot move '/' to '{raw_destination}': Device or resource busy",
                "Device or resource busy",
            )

        destination = _into_directory(context, context.resolve(raw_destination), node)
        if destination == source:
            return context.fail(
                f"mv: '{raw_source}' and '{raw_destination}' are the same file", "Same file"
            )
        if is_descendant(destination, source):
            return context.fail(
                f"mv: cannot move '{raw_source}' to a subdirectory of itself, '{raw_destination}'",
                "Invalid argument",
            )
        error = _check_target(context, destination, node)
        if error is None and node.is_dir and context.store.list_children(destination):
            error = "Directory not empty"
        if error:
            return context.fail(
                f"mv: cannot move '{raw_source}' to '{raw_destination}': {error}", error
            )

        context.store.move(source, destination)
        return context.ok()


def _into_directory(context: CommandContext, destination: str, source: FilesystemNode) -> str:
    """An existing directory destination means "place the source inside it"."""
    existing = context.store.get(destination)
    if existing is not None and existing.is_dir and existing.path != source.path:
        return "/" + source.name if destination == "/" else f"{destination}/{source.name}"
    return destination


def _check_target(context: CommandContext, destination: str, source: FilesystemNode) -> str | None:
    parent = context.store.get(parent_path(destination) or "/")
    if parent is None or not parent.is_dir:
        return NO_SUCH_FILE
    existing = context.store.get(destination)
    if existing is not None and existing.kind != source.kind:
        return "Is a directory" if existing.is_dir else "Not a directory"
    return None


class ChmodCommand(Command):
    """Sets the cosmetic permission string to `-` followed by the mode as typed. Nothing is enforced."""

    @override
    def get_name(self) -> str:
        return "chmod"

    @override
    def get_description(self) -> str:
        return "Change file permissions"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        if len(args) < 2:
            return context.fail("chmod: missing operand", "Missing operand")

        mode, raw = args[0], args[1]
        path = context.resolve(raw)
        if not context.store.exists(path):
            return context.fail(
                f"chmod: cannot access '{raw}': {NO_SUCH_FILE}", NO_SUCH_FILE
            )

        context.store.update(path, permissions="-" + mode)
        return context.ok()


class FindCommand(Command):
    """
    Lists descendants of a directory.

    `-name` matches by substring with `*` stripped (a lone `*` matches all);
    it is not a glob. `-type f|d` filters by kind. A missing start path yields
    an empty listing.
    """

    @override
    def get_name(self) -> str:
        return "find"

    @override
    def get_description(self) -> str:
        return "Find files and directories"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        start = None
        pattern = "*"
        kind = None
        tokens = iter(args)
        for token in tokens:
            if token == "-name":
                pattern = next(tokens, "*")
            elif token == "-type":
                kind = {"f": "file", "d": "directory"}.get(next(tokens, ""))
            elif not token.startswith("-") and start is None:
                start = token

        root = context.resolve(start) if start else context.cwd
        needle = pattern.replace("*", "")
        matches = [
            node.path
            for node in context.store.list_descendants(root)
            if (pattern == "*" or needle in node.name) and (kind is None or node.kind == kind)
        ]
        return context.ok("\n".join(matches))


class GrepCommand(Command):
    """Prints the lines of a file containing a plain substring."""

    @override
    def get_name(self) -> str:
        return "grep"

    @override
    def get_description(self) -> str:
        return "Search text in files"

    @override
    async def execute(self, context: CommandContext, name: str, args: list[str]) -> CommandResult:
        if len(args) < 2:
            return context.fail("grep: missing pattern or file", "Missing arguments")

        pattern, raw = args[0].strip('"'), args[1]
        node = context.store.get(context.resolve(raw))
        if node is None:
            return context.fail(f"grep: {raw}: {NO_SUCH_FILE}", NO_SUCH_FILE)
        if node.is_dir:
            return context.fail(f"grep: {raw}: Is a directory", "Is a directory")

        lines = (node.content or "").split("\n")
        return context.ok("\n".join(line for line in lines if pattern in line))
