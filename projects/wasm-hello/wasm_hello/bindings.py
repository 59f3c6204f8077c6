import inspect
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ferris_utils.file import create_file
from ferris_utils.project import AbstractProjectGenerator
from wasm_hello.exports import EXPORTS, Export
from wasm_hello.kinds import AbiType
from wasm_hello.settings import BINDINGS_HEADER_NAME, BINDINGS_HOST_NAME, MODULE_NAME

logger = logging.getLogger("ferris")

# C spelling of each abi type, as parameter and as return value
C_PARAM_TYPES = {AbiType.I32: "int32_t ", AbiType.STRING: "const char *"}
C_RESULT_TYPES = {AbiType.I32: "int32_t", AbiType.STRING: "int64_t"}


def c_params(export: Export) -> list[str]:
    """C parameter list; string results are written into a caller buffer."""
    names = list(inspect.signature(export.func).parameters)
    params = [f"{C_PARAM_TYPES[kind]}{name}" for kind, name in zip(export.params, names)]
    if export.result == AbiType.STRING:
        params.extend(["char *out", "size_t out_len"])
    return params


class BindingsProjectGenerator(AbstractProjectGenerator):
    """Writes the C declarations of the function table plus an example host."""

    def __init__(self, root: Path):
        super().__init__(root)
        self.template_env = Environment(
            loader=FileSystemLoader(Path(__file__).parent / "templates"),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.template_env.get_template(template_name)
        return template.render(**kwargs)

    def create(self) -> list[Path]:
        exports = [
            {
                "name": export.name,
                "result": C_RESULT_TYPES[export.result],
                "params": c_params(export),
                "returns_string": export.result == AbiType.STRING,
            }
            for export in EXPORTS.values()
        ]
        guard = f"{MODULE_NAME.upper()}_H"

        header = self.root / BINDINGS_HEADER_NAME
        create_file(
            header,
            self.render_template(
                "module.h.j2", module_name=MODULE_NAME, guard=guard, exports=exports
            ),
        )
        host = self.root / BINDINGS_HOST_NAME
        create_file(
            host,
            self.render_template(
                "host_example.c.j2",
                module_name=MODULE_NAME,
                header_name=BINDINGS_HEADER_NAME,
            ),
        )
        logger.info(f"bindings written to {self.root}")
        return [header, host]
