"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Shared registry, compiler and project fixtures
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from dotenv import load_dotenv

if TYPE_CHECKING:
    from forge.compiler import ProjectCompiler
    from forge.ir import Project
    from forge.registry import CapsuleRegistry

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def registry() -> CapsuleRegistry:
    """Frozen registry of built-in capsules.

    Returns:
        Registry shared by the whole session (it is immutable).
    """
    from forge.registry import build_default_registry

    return build_default_registry()


@pytest.fixture(scope="session")
def project_compiler(registry: CapsuleRegistry) -> ProjectCompiler:
    """Compiler over the built-in registry."""
    from forge.compiler import ProjectCompiler

    return ProjectCompiler(registry, max_workers=4)


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def sample_project_data() -> dict[str, Any]:
    """Persisted JSON of a small sign-in screen.

    Returns:
        Project data with a stack holding a heading, an input and a button.
    """
    return {
        "id": "sign-in",
        "name": "Sign In",
        "capsules": [
            {
                "id": "form",
                "type": "stack",
                "props": {"gap": "lg"},
                "children": [
                    {"id": "heading", "type": "text", "props": {"content": "Sign In", "variant": "heading"}},
                    {"id": "email", "type": "input", "props": {"label": "Email", "inputType": "email"}},
                    {"id": "submit", "type": "button", "props": {"label": "Sign In", "onPress": "signIn"}},
                ],
            }
        ],
        "theme": {"colors": {"primary": "#3b82f6"}},
        "targets": ["web", "ios", "android"],
    }


@pytest.fixture
def sample_project(sample_project_data: dict[str, Any]) -> Project:
    """Parsed sample project."""
    from forge.ir import Project

    return Project.model_validate(sample_project_data)
