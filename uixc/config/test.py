"""Tests for configuration management."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from .lib import (
    CompilationMode,
    CompilerConfig,
    EnvConfig,
    EnvVar,
    OutputFormat,
    describe_environment,
    get_environment,
    get_environment_info,
    get_output_dir,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("UIX_COMPONENT_NAME", raising=False)
        assert get_environment(EnvVar.UIX_COMPONENT_NAME) == "CompiledUI"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("UIX_COMPONENT_NAME", "FromEnv")
        result = get_environment(EnvVar.UIX_COMPONENT_NAME, override="Explicit")
        assert result == "Explicit"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("UIX_MODE", "production")
        assert get_environment(EnvVar.UIX_MODE) == "production"

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("UIX_STRICT_VALIDATION", value)
            assert get_environment(EnvVar.UIX_STRICT_VALIDATION) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("UIX_STRICT_VALIDATION", value)
            assert get_environment(EnvVar.UIX_STRICT_VALIDATION) is False

    @pytest.mark.unit
    def test_unrecognized_bool_returns_default(self, monkeypatch):
        """Unparseable boolean falls back to the default."""
        monkeypatch.setenv("UIX_ENABLE_DOCS", "maybe")
        assert get_environment(EnvVar.UIX_ENABLE_DOCS) is False

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch, tmp_path):
        """Path variables are converted to Path objects."""
        monkeypatch.setenv("UIX_OUTPUT_DIR", str(tmp_path))
        result = get_environment(EnvVar.UIX_OUTPUT_DIR)
        assert isinstance(result, Path)
        assert result == tmp_path


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.UIX_STRICT_VALIDATION)
        assert isinstance(info, EnvConfig)
        assert info.name == "UIX_STRICT_VALIDATION"
        assert info.default is False
        assert info.var_type is bool
        assert info.category == "compiler"

    @pytest.mark.unit
    def test_description_present(self):
        """Description field is populated for every variable."""
        for var in EnvVar:
            assert get_environment_info(var).description


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_lists_all_without_category(self):
        assert list_environment_variables() == list(EnvVar)

    @pytest.mark.unit
    def test_filters_by_category(self):
        output_vars = list_environment_variables("output")
        assert set(output_vars) == {EnvVar.UIX_OUTPUT_DIR, EnvVar.UIX_COMPONENT_NAME}


class TestDescribeEnvironment:
    """Tests for the environment listing shown by the CLI."""

    @pytest.mark.unit
    def test_one_line_per_variable(self):
        assert len(describe_environment()) == len(EnvVar)

    @pytest.mark.unit
    def test_shows_resolved_value_and_default(self, monkeypatch):
        monkeypatch.setenv("UIX_COMPONENT_NAME", "Dashboard")
        lines = describe_environment("output")
        assert len(lines) == 2
        assert any(line.startswith("UIX_COMPONENT_NAME=Dashboard (default: CompiledUI) - ") for line in lines)


class TestGetOutputDir:
    """Tests for output directory resolution."""

    @pytest.mark.unit
    def test_override_wins(self, monkeypatch):
        monkeypatch.setenv("UIX_OUTPUT_DIR", "/from/env")
        assert get_output_dir("build") == Path("build")

    @pytest.mark.unit
    def test_default_is_src(self, monkeypatch):
        monkeypatch.delenv("UIX_OUTPUT_DIR", raising=False)
        assert get_output_dir() == Path("src")


# =============================================================================
# Tests for CompilerConfig
# =============================================================================


class TestCompilerConfig:
    """Tests for the validated compiler settings model."""

    @pytest.mark.unit
    def test_defaults(self):
        """Initializes with development defaults."""
        config = CompilerConfig()
        assert config.mode == CompilationMode.DEVELOPMENT
        assert config.output_format == OutputFormat.JSX
        assert config.enable_typescript is False
        assert config.strict_validation is False
        assert config.component_name == "CompiledUI"
        assert config.file_extension == ".jsx"

    @pytest.mark.unit
    def test_overrides(self):
        """Accepts and overrides default options."""
        config = CompilerConfig(
            mode="production",
            enable_typescript=True,
            strict_validation=True,
            custom_schemas={"MyComponent": {}},
        )
        assert config.mode == CompilationMode.PRODUCTION
        assert config.enable_typescript is True
        assert config.strict_validation is True
        assert config.custom_schemas == {"MyComponent": {}}

    @pytest.mark.unit
    def test_typescript_switches_to_tsx(self):
        config = CompilerConfig(enable_typescript=True)
        assert config.output_format == OutputFormat.TSX
        assert config.file_extension == ".tsx"

    @pytest.mark.unit
    def test_rejects_invalid_mode(self):
        with pytest.raises(ValidationError):
            CompilerConfig(mode="staging")

    @pytest.mark.unit
    def test_rejects_lowercase_component_name(self):
        with pytest.raises(ValidationError, match="capitalized identifier"):
            CompilerConfig(component_name="compiledUi")

    @pytest.mark.unit
    def test_from_environment(self, monkeypatch):
        """Reads UIX_* variables, explicit overrides win."""
        monkeypatch.setenv("UIX_STRICT_VALIDATION", "true")
        monkeypatch.setenv("UIX_COMPONENT_NAME", "Dashboard")
        monkeypatch.setenv("UIX_MODE", "production")

        config = CompilerConfig.from_environment(component_name="Widget")

        assert config.strict_validation is True
        assert config.mode == CompilationMode.PRODUCTION
        assert config.component_name == "Widget"

    @pytest.mark.unit
    def test_from_environment_ignores_none_overrides(self, monkeypatch):
        monkeypatch.setenv("UIX_ENABLE_DOCS", "1")
        config = CompilerConfig.from_environment(enable_doc_generation=None)
        assert config.enable_doc_generation is True
