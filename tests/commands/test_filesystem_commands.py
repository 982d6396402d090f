#!/usr/bin/env python3
"""
Unit тесты для filesystem_commands.py
"""

import pytest


class TestNavigation:
    """Тесты для pwd, cd и ls"""

    @pytest.mark.asyncio
    async def test_pwd_starts_at_home(self, shell):
        """Тест: новая сессия начинается в домашней директории"""
        result = await shell.execute("pwd")
        assert result.success
        assert result.output == "/home/user"
        assert result.current_directory == "/home/user"

    @pytest.mark.asyncio
    async def test_cd_absolute_relative_and_home(self, shell):
        """Тест перехода по абсолютному, относительному пути и в ~"""
        result = await shell.execute("cd /home")
        assert result.success
        assert result.current_directory == "/home"

        result = await shell.execute("cd user/Documents")
        assert result.current_directory == "/home/user/Documents"

        result = await shell.execute("cd ..")
        assert result.current_directory == "/home/user"

        await shell.execute("cd /")
        result = await shell.execute("cd")
        assert result.current_directory == "/home/user"

    @pytest.mark.asyncio
    async def test_cd_missing_directory(self, shell):
        """Тест: переход в несуществующую директорию не меняет CWD"""
        result = await shell.execute("cd nowhere")
        assert not result.success
        assert result.output == "cd: no such file or directory: nowhere"
        assert result.error == "No such file or directory"
        assert result.current_directory == "/home/user"

    @pytest.mark.asyncio
    async def test_cd_into_file(self, shell):
        result = await shell.execute("cd .bashrc")
        assert not result.success
        assert result.output == "cd: not a directory: .bashrc"
        assert shell.state.cwd == "/home/user"

    @pytest.mark.asyncio
    async def test_ls_hides_dotfiles(self, shell):
        """Тест: ls без -a скрывает файлы, начинающиеся с точки"""
        result = await shell.execute("ls")
        assert result.success
        assert result.output == "Documents  Projects"

    @pytest.mark.asyncio
    async def test_ls_all_is_sorted(self, shell):
        """Тест: ls -a показывает скрытые файлы в отсортированном порядке"""
        result = await shell.execute("ls -a")
        assert result.output == ".bash_logout  .bashrc  .profile  Documents  Projects"

    @pytest.mark.asyncio
    async def test_ls_long_format(self, shell):
        """Тест длинного формата ls -l"""
        result = await shell.execute("ls -l")
        lines = result.output.split("\n")
        assert lines[0] == "total 20"
        assert len(lines) == 3
        assert lines[1].startswith("drwxr-xr-x 1 user user     4096 ")
        assert lines[1].endswith(" Documents")
        assert lines[2].endswith(" Projects")

    @pytest.mark.asyncio
    async def test_ls_long_all_includes_dot_entries(self, shell):
        result = await shell.execute("ls -la")
        lines = result.output.split("\n")
        assert lines[1].endswith(" .")
        assert lines[2].endswith(" ..")
        assert any(line.endswith(" .bashrc") and "    3526 " in line for line in lines)

    @pytest.mark.asyncio
    async def test_ls_missing_path(self, shell):
        result = await shell.execute("ls ghost")
        assert not result.success
        assert result.output == "ls: cannot access 'ghost': No such file or directory"

    @pytest.mark.asyncio
    async def test_ls_of_a_file(self, shell):
        result = await shell.execute("ls .profile")
        assert result.success
        assert result.output == ".profile"


class TestCreation:
    """Тесты для mkdir, touch, echo и cat"""

    @pytest.mark.asyncio
    async def test_mkdir_creates_directory(self, shell, store):
        result = await shell.execute("mkdir proj")
        assert result.success
        node = store.get("/home/user/proj")
        assert node.kind == "directory"
        assert node.permissions == "drwxr-xr-x"
        assert node.size == "4096"

    @pytest.mark.asyncio
    async def test_mkdir_existing_fails(self, shell):
        result = await shell.execute("mkdir Documents")
        assert not result.success
        assert result.output == "mkdir: cannot create directory 'Documents': File exists"

    @pytest.mark.asyncio
    async def test_mkdir_missing_parent(self, shell, store):
        """Тест: mkdir без -p требует существующего родителя"""
        result = await shell.execute("mkdir a/b")
        assert not result.success
        assert "No such file or directory" in result.output
        assert not store.exists("/home/user/a/b")

    @pytest.mark.asyncio
    async def test_mkdir_parents(self, shell, store):
        result = await shell.execute("mkdir -p a/b/c")
        assert result.success
        for path in ["/home/user/a", "/home/user/a/b", "/home/user/a/b/c"]:
            assert store.get(path).is_dir
        assert (await shell.execute("mkdir -p a/b")).success

    @pytest.mark.asyncio
    async def test_mkdir_partial_failure(self, shell, store):
        """Тест: ошибки по отдельным путям не мешают создать остальные"""
        result = await shell.execute("mkdir x Documents y/z w")
        assert store.get("/home/user/x").is_dir
        assert store.get("/home/user/w").is_dir
        assert not store.exists("/home/user/y/z")
        assert result.success is False
        assert result.output.split("\n") == [
            "mkdir: cannot create directory 'Documents': File exists",
            "mkdir: cannot create directory 'y/z': No such file or directory",
        ]
        assert result.error == result.output.split("\n")[0]

    @pytest.mark.asyncio
    async def test_mkdir_without_operand(self, shell):
        result = await shell.execute("mkdir")
        assert not result.success
        assert result.output == "mkdir: missing operand"

    @pytest.mark.asyncio
    async def test_touch_and_cat_empty_file(self, shell, store):
        """Тест: touch создает пустой файл"""
        assert (await shell.execute("touch a.txt")).success
        node = store.get("/home/user/a.txt")
        assert node.content == ""
        assert node.size == "0"
        assert node.permissions == "-rw-r--r--"

        result = await shell.execute("cat a.txt")
        assert result.success
        assert result.output == ""

    @pytest.mark.asyncio
    async def test_touch_keeps_existing_content(self, shell, store):
        await shell.execute("echo hello > a.txt")
        await shell.execute("touch a.txt")
        assert store.get("/home/user/a.txt").content == "hello"

    @pytest.mark.asyncio
    async def test_touch_missing_parent(self, shell, store):
        result = await shell.execute("touch nowhere/a.txt")
        assert not result.success
        assert result.output == "touch: cannot touch 'nowhere/a.txt': No such file or directory"
        assert not store.exists("/home/user/nowhere/a.txt")

    @pytest.mark.asyncio
    async def test_echo_prints_without_quotes(self, shell):
        result = await shell.execute('echo "hello   world"')
        assert result.output == "hello world"

    @pytest.mark.asyncio
    async def test_echo_redirect_overwrites(self, shell, store):
        """Тест: echo > перезаписывает файл"""
        assert (await shell.execute('echo "hello world" > greet.txt')).success
        node = store.get("/home/user/greet.txt")
        assert node.content == "hello world"
        assert node.size == "11"

        await shell.execute("echo bye > greet.txt")
        assert (await shell.execute("cat greet.txt")).output == "bye"

    @pytest.mark.asyncio
    async def test_echo_append(self, shell):
        await shell.execute("echo one > log.txt")
        await shell.execute("echo two >> log.txt")
        assert (await shell.execute("cat log.txt")).output == "one\ntwo"

    @pytest.mark.asyncio
    async def test_echo_into_directory(self, shell):
        result = await shell.execute("echo hi > Documents")
        assert not result.success
        assert result.error == "Is a directory"

    @pytest.mark.asyncio
    async def test_echo_redirect_missing_parent(self, shell, store):
        """Тест: echo > не создает файл в несуществующей директории"""
        result = await shell.execute("echo hi > nowhere/out.txt")
        assert not result.success
        assert result.output == "bash: nowhere/out.txt: No such file or directory"
        assert not store.exists("/home/user/nowhere/out.txt")

    @pytest.mark.asyncio
    async def test_cat_missing_and_directory(self, shell):
        result = await shell.execute("cat ghost.txt")
        assert not result.success
        assert result.output == "cat: ghost.txt: No such file or directory"

        result = await shell.execute("cat Documents")
        assert not result.success
        assert result.output == "cat: Documents: Is a directory"

    @pytest.mark.asyncio
    async def test_cat_without_operand(self, shell):
        result = await shell.execute("cat")
        assert result.output == "cat: missing file operand"


class TestRemoval:
    """Тесты для rm"""

    @pytest.mark.asyncio
    async def test_rm_file(self, shell, store):
        await shell.execute("touch a.txt")
        assert (await shell.execute("rm a.txt")).success
        assert not store.exists("/home/user/a.txt")

    @pytest.mark.asyncio
    async def test_rm_missing(self, shell):
        result = await shell.execute("rm ghost")
        assert not result.success
        assert result.output == "rm: cannot remove 'ghost': No such file or directory"

    @pytest.mark.asyncio
    async def test_rm_partial_failure(self, shell, store):
        """Тест: существующие файлы удаляются, даже если часть путей отсутствует"""
        await shell.execute("touch a b")
        result = await shell.execute("rm a ghost b ghost2")
        assert not store.exists("/home/user/a")
        assert not store.exists("/home/user/b")
        assert result.success is False
        assert result.output.split("\n") == [
            "rm: cannot remove 'ghost': No such file or directory",
            "rm: cannot remove 'ghost2': No such file or directory",
        ]
        assert result.error == result.output.split("\n")[0]

    @pytest.mark.asyncio
    async def test_rm_force_ignores_missing(self, shell):
        assert (await shell.execute("rm -f ghost")).success

    @pytest.mark.asyncio
    async def test_rm_empty_directory(self, shell, store):
        """Тест: пустая директория удаляется без -r"""
        await shell.execute("mkdir empty")
        assert (await shell.execute("rm empty")).success
        assert not store.exists("/home/user/empty")

    @pytest.mark.asyncio
    async def test_rm_refuses_non_empty_directory(self, shell, store):
        """Тест: непустая директория без -r не удаляется"""
        await shell.execute("mkdir proj")
        await shell.execute("touch proj/a.txt")
        result = await shell.execute("rm proj")
        assert not result.success
        assert result.output == "rm: cannot remove 'proj': Directory not empty"
        assert store.exists("/home/user/proj/a.txt")

    @pytest.mark.asyncio
    async def test_rm_recursive_leaves_no_orphans(self, shell, store):
        await shell.execute("mkdir -p proj/src")
        await shell.execute("touch proj/src/main.c")
        assert (await shell.execute("rm -rf proj")).success
        assert not any(node.path.startswith("/home/user/proj") for node in store.all_nodes())

    @pytest.mark.asyncio
    async def test_rm_root_is_refused(self, shell, store):
        result = await shell.execute("rm -rf /")
        assert not result.success
        assert store.exists("/")
        assert store.exists("/home/user")

    @pytest.mark.asyncio
    async def test_rm_current_directory_moves_cwd_up(self, shell):
        """Тест: после удаления текущей директории CWD поднимается к существующему предку"""
        await shell.execute("mkdir -p proj/deep")
        await shell.execute("cd proj/deep")
        result = await shell.execute("rm -r /home/user/proj")
        assert result.success
        assert result.current_directory == "/home/user"
        assert (await shell.execute("pwd")).output == "/home/user"


class TestCopyMove:
    """Тесты для cp и mv"""

    @pytest.mark.asyncio
    async def test_cp_file(self, shell, store):
        await shell.execute("echo data > a.txt")
        assert (await shell.execute("cp a.txt b.txt")).success
        assert store.get("/home/user/b.txt").content == "data"
        assert store.exists("/home/user/a.txt")

    @pytest.mark.asyncio
    async def test_cp_into_directory(self, shell, store):
        await shell.execute("echo data > a.txt")
        assert (await shell.execute("cp a.txt Documents")).success
        assert store.get("/home/user/Documents/a.txt").content == "data"

    @pytest.mark.asyncio
    async def test_cp_directory_requires_recursive(self, shell, store):
        result = await shell.execute("cp Documents Backup")
        assert not result.success
        assert result.output == "cp: -r not specified; omitting directory 'Documents'"

        await shell.execute("touch Documents/notes.txt")
        assert (await shell.execute("cp -r Documents Backup")).success
        assert store.exists("/home/user/Backup/notes.txt")

    @pytest.mark.asyncio
    async def test_cp_missing_source(self, shell):
        result = await shell.execute("cp ghost b")
        assert result.output == "cp: cannot stat 'ghost': No such file or directory"

    @pytest.mark.asyncio
    async def test_cp_without_destination(self, shell):
        result = await shell.execute("cp a.txt")
        assert not result.success
        assert result.output == "cp: missing destination file operand after source"

    @pytest.mark.asyncio
    async def test_mv_renames(self, shell, store):
        await shell.execute("echo data > a.txt")
        assert (await shell.execute("mv a.txt b.txt")).success
        assert not store.exists("/home/user/a.txt")
        assert store.get("/home/user/b.txt").name == "b.txt"

    @pytest.mark.asyncio
    async def test_mv_directory_moves_subtree(self, shell, store):
        await shell.execute("mkdir -p proj/src")
        await shell.execute("echo x > proj/src/main.c")
        assert (await shell.execute("mv proj Projects")).success
        assert store.get("/home/user/Projects/proj/src/main.c").content == "x"
        assert not store.exists("/home/user/proj/src/main.c")

    @pytest.mark.asyncio
    async def test_mv_into_itself(self, shell):
        await shell.execute("mkdir proj")
        await shell.execute("mkdir proj/inner")
        result = await shell.execute("mv proj proj/inner")
        assert not result.success
        assert result.error == "Invalid argument"

    @pytest.mark.asyncio
    async def test_mv_follows_cwd(self, shell):
        """Тест: перемещение текущей директории не оставляет сессию в пустоте"""
        await shell.execute("mkdir proj")
        await shell.execute("cd proj")
        result = await shell.execute("mv /home/user/proj /home/user/renamed")
        assert result.success
        assert result.current_directory == "/home/user"


class TestQueries:
    """Тесты для chmod, find и grep"""

    @pytest.mark.asyncio
    async def test_chmod_octal(self, shell, store):
        """Тест: chmod сохраняет режим как есть, с ведущим '-'"""
        await shell.execute("touch run.sh")
        assert (await shell.execute("chmod 755 run.sh")).success
        assert store.get("/home/user/run.sh").permissions == "-755"

    @pytest.mark.asyncio
    async def test_chmod_stores_other_modes_verbatim(self, shell, store):
        await shell.execute("touch run.sh")
        await shell.execute("chmod +x run.sh")
        assert store.get("/home/user/run.sh").permissions == "-+x"

    @pytest.mark.asyncio
    async def test_chmod_missing(self, shell):
        result = await shell.execute("chmod 755 ghost")
        assert not result.success
        assert result.output == "chmod: cannot access 'ghost': No such file or directory"

        result = await shell.execute("chmod 755")
        assert result.output == "chmod: missing operand"

    @pytest.mark.asyncio
    async def test_find_by_name_substring(self, shell):
        """Тест: -name сравнивает подстроку, звездочки отбрасываются"""
        await shell.execute("touch Documents/report.txt")
        await shell.execute("touch Projects/notes.txt")
        result = await shell.execute("find . -name *.txt")
        assert result.success
        assert result.output.split("\n") == [
            "/home/user/Documents/report.txt",
            "/home/user/Projects/notes.txt",
        ]

    @pytest.mark.asyncio
    async def test_find_excludes_start_and_filters_type(self, shell):
        result = await shell.execute("find /home -type d")
        paths = result.output.split("\n")
        assert "/home" not in paths
        assert "/home/user/Documents" in paths
        assert "/home/user/.bashrc" not in paths

    @pytest.mark.asyncio
    async def test_find_missing_start_is_empty(self, shell):
        result = await shell.execute("find /ghost")
        assert result.success
        assert result.output == ""

    @pytest.mark.asyncio
    async def test_grep(self, shell):
        await shell.execute("echo alpha > a.txt")
        await shell.execute("echo beta >> a.txt")
        await shell.execute("echo alphabet >> a.txt")
        result = await shell.execute("grep alpha a.txt")
        assert result.output == "alpha\nalphabet"

        result = await shell.execute("grep zeta a.txt")
        assert result.success
        assert result.output == ""

    @pytest.mark.asyncio
    async def test_grep_errors(self, shell):
        assert (await shell.execute("grep x")).output == "grep: missing pattern or file"
        result = await shell.execute("grep x ghost")
        assert result.output == "grep: ghost: No such file or directory"
