"""The ``terraform test`` command."""

from __future__ import annotations

from typing import Any

from tfwrap.exec import CommandOutput, run_terraform


class TestCommand:
    """Run a module's ``.tftest.hcl`` integration tests (Terraform 1.6 and later)."""

    __test__ = False

    def __init__(self) -> None:
        self._filter: str | None = None
        self._json = False
        self._test_directory: str | None = None
        self._verbose = False
        self._vars: list[tuple[str, str]] = []
        self._var_files: list[str] = []
        self._parallelism: int | None = None
        self._junit_xml: str | None = None
        self._raw_args: list[str] = []

    def __repr__(self) -> str:
        return f"TestCommand(args={self.args()!r})"

    def filter(self, name: str) -> TestCommand:
        """Run only the named test (``-filter``)."""
        self._filter = str(name)
        return self

    def json(self) -> TestCommand:
        """Enable machine-readable JSON output (``-json``)."""
        self._json = True
        return self

    def test_directory(self, path: str) -> TestCommand:
        """Set the directory holding test files (``-test-directory``)."""
        self._test_directory = str(path)
        return self

    def verbose(self) -> TestCommand:
        """Enable verbose output (``-verbose``)."""
        self._verbose = True
        return self

    def var(self, name: str, value: str) -> TestCommand:
        """Set a variable (``-var=name=value``)."""
        self._vars.append((str(name), str(value)))
        return self

    def var_file(self, path: str) -> TestCommand:
        """Add a variable definitions file (``-var-file``)."""
        self._var_files.append(str(path))
        return self

    def parallelism(self, n: int) -> TestCommand:
        """Limit the number of concurrent operations (``-parallelism``)."""
        if n < 0:
            raise ValueError("parallelism must not be negative")
        self._parallelism = int(n)
        return self

    def junit_xml(self, path: str) -> TestCommand:
        """Write results to a JUnit XML file (``-junit-xml``)."""
        self._junit_xml = str(path)
        return self

    def arg(self, arg: str) -> TestCommand:
        """Append a raw argument for options not covered here."""
        self._raw_args.append(str(arg))
        return self

    def args(self) -> list[str]:
        """The subcommand and its flags."""
        args = ["test"]
        if self._filter is not None:
            args.append(f"-filter={self._filter}")
        if self._json:
            args.append("-json")
        if self._test_directory is not None:
            args.append(f"-test-directory={self._test_directory}")
        if self._verbose:
            args.append("-verbose")
        args.extend(f"-var={name}={value}" for name, value in self._vars)
        args.extend(f"-var-file={path}" for path in self._var_files)
        if self._parallelism is not None:
            args.append(f"-parallelism={self._parallelism}")
        if self._junit_xml is not None:
            args.append(f"-junit-xml={self._junit_xml}")
        args.extend(self._raw_args)
        return args

    async def execute(self, tf: Any) -> CommandOutput:
        """Run the command."""
        return await run_terraform(tf, self.args())