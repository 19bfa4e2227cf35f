"""
Configuration for the Netflu compiler and build orchestrator.

Priority for build settings: command-line flags > environment variables
(NETFLU_*) > defaults.
"""

import os
from dataclasses import dataclass

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .codegen import CodegenOptions


@dataclass
class CompilerOptions:
    """Options for one run of the compilation pipeline."""
    filename: str = "<string>"
    entry_point: str = "main"
    indent: str = "    "

    def codegen_options(self) -> CodegenOptions:
        return CodegenOptions(indent=self.indent, entry_point=self.entry_point)


class BuildConfig(BaseSettings):
    """
    Settings for building a Netflu project with an external toolchain.

    Every field can be set from a NETFLU_<FIELD> environment variable, for
    example NETFLU_RUSTC or NETFLU_BUILD_DIR. NETFLU_SKIP_TOOLCHAIN turns
    off the rustc step.
    """

    model_config = SettingsConfigDict(env_prefix="NETFLU_", env_ignore_empty=True, extra="ignore")

    entry_file: str = Field(default=os.path.join("src", "main.ntf"),
                            description="Entry source file, relative to the project")
    build_dir: str = Field(default="target", description="Output directory inside the project")
    output_name: str = Field(default="generated.rs", description="Generated Rust file name")
    binary_name: str = Field(default="generated_bin", description="Name of the built binary")
    rustc: str = Field(default="rustc", description="rustc executable")
    run_toolchain: bool = Field(default=True, description="Invoke rustc after generation")
    skip_toolchain: bool = Field(default=False, description="Generate Rust only")
    compiler: CompilerOptions = Field(default_factory=CompilerOptions)

    @model_validator(mode="after")
    def _apply_skip_toolchain(self) -> "BuildConfig":
        if self.skip_toolchain:
            self.run_toolchain = False
        return self
