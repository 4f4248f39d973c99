"""Project compiler: one entry point from a project snapshot to target files.

Pipeline for one target:
    1. validate every instance (fatal errors raise ProjectValidationError)
    2. resolve the theme once
    3. walk the tree depth-first, emitting children before their parent
    4. deduplicate units by name
    5. assemble the target scaffold and merge auxiliary and extra files

Generation is pure: the same project, target and options always produce
byte-identical manifests.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from forge.config import get_max_workers, get_package_prefix
from forge.emitters import RenderNode, placeholder_emitter, placeholder_node
from forge.ir import (
    ComponentInstance,
    FileKind,
    GenerationWarning,
    ManifestFile,
    Project,
    ProjectManifest,
    SourceFragment,
    TargetFile,
    TargetOptions,
    is_package_prefix,
)
from forge.registry import CapsuleRegistry
from forge.schema import Platform, Target
from forge.syntax import KOTLIN_KEYWORDS, to_app_name
from forge.targets import AssemblyInput, UnitSource, get_assembler, unique
from forge.theme import ResolvedStyle, ThemeResolver
from forge.validation import ErrorCode, ProjectReport, ProjectValidationError, ValidationError, check_project

logger = logging.getLogger(__name__)

# =============================================================================
# Errors and results
# =============================================================================


class FileConflictError(RuntimeError):
    """Two different contents claim the same unit name or file path.

    Attributes:
        path: Conflicting unit name or file path.
    """

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"Conflicting content for '{path}'")


class GenerationStatus(str, Enum):
    """Outcome of one target's generation."""

    SUCCEEDED = "succeeded"
    SUCCEEDED_WITH_WARNINGS = "succeeded_with_warnings"
    FAILED = "failed"


@dataclass
class GenerationError:
    """Why a target failed.

    Attributes:
        code: Error code ("ValidationFailed", "FileConflict", "InternalError").
        message: Human-readable explanation.
        details: Structured details (validation records, conflicting path).
    """

    code: str
    message: str
    details: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


@dataclass
class GenerationResult:
    """Non-raising outcome of `ProjectCompiler.compile`.

    A failed result carries no files.
    """

    target: Target
    status: GenerationStatus
    manifest: ProjectManifest | None = None
    error: GenerationError | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.status != GenerationStatus.FAILED

    @property
    def warnings(self) -> list[GenerationWarning]:
        return self.manifest.warnings if self.manifest else []

    @property
    def file_count(self) -> int:
        return self.manifest.file_count if self.manifest else 0

    @property
    def total_size(self) -> int:
        return self.manifest.total_size if self.manifest else 0


@dataclass
class TargetSummary:
    """Per-target line of a multi-target run."""

    target: Target
    success: bool
    file_count: int = 0
    total_size: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "platform": self.target.value,
            "success": self.success,
            "fileCount": self.file_count,
            "totalSize": self.total_size,
        }
        if self.errors:
            data["errors"] = self.errors
        if self.warnings:
            data["warnings"] = self.warnings
        return data


@dataclass
class MultiTargetSummary:
    """Totals of a multi-target run."""

    total_platforms: int = 0
    successful_platforms: int = 0
    failed_platforms: list[str] = field(default_factory=list)
    total_files: int = 0
    total_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalPlatforms": self.total_platforms,
            "successfulPlatforms": self.successful_platforms,
            "failedPlatforms": self.failed_platforms,
            "totalFiles": self.total_files,
            "totalSize": self.total_size,
        }


@dataclass
class MultiTargetResult:
    """Outcome of `ProjectCompiler.generate_multi`.

    Attributes:
        per_target: Summary per target, in request order.
        results: Full result per target, in request order.
        summary: Totals across targets.
    """

    per_target: dict[Target, TargetSummary]
    results: dict[Target, GenerationResult]
    summary: MultiTargetSummary

    @property
    def success(self) -> bool:
        """True when every target succeeded."""
        return not self.summary.failed_platforms


# =============================================================================
# Helpers
# =============================================================================


def coerce_options(options: TargetOptions | dict[str, Any] | None) -> TargetOptions:
    if options is None:
        return TargetOptions()
    if isinstance(options, TargetOptions):
        return options
    return TargetOptions.model_validate(options)


def default_namespace(app_name: str, prefix: str) -> str:
    """Reverse-DNS namespace for an app, e.g. ("SignInDemo", "com.forge") -> com.forge.signindemo."""
    segment = app_name.lower()
    if segment in KOTLIN_KEYWORDS:
        segment += "app"
    return f"{prefix}.{segment}"


def _warning(error: ValidationError) -> GenerationWarning:
    return GenerationWarning(
        code=error.code.value,
        message=error.message,
        instance_id=error.instance_id,
        path=error.path,
    )


@dataclass
class _Walk:
    """Mutable state of one tree walk."""

    target: Target
    theme: ResolvedStyle
    report: ProjectReport
    fragments: list[SourceFragment | None] = field(default_factory=list)
    warnings: list[GenerationWarning] = field(default_factory=list)


# =============================================================================
# Compiler
# =============================================================================


class ProjectCompiler:
    """Compiles projects into per-target file manifests.

    The registry (frozen) and resolver (stateless) are shared read-only,
    so one compiler can serve many threads. The package prefix is read
    once here; later environment changes do not affect output.

    Raises:
        ValueError: If the package prefix is not a dotted identifier.

    Example:
        >>> compiler = ProjectCompiler(build_default_registry())
        >>> manifest = compiler.generate(project, "web-react")
        >>> manifest.entry
        'src/main.tsx'
    """

    def __init__(
        self,
        registry: CapsuleRegistry,
        resolver: ThemeResolver | None = None,
        max_workers: int | None = None,
        package_prefix: str | None = None,
    ):
        self.registry = registry
        self.resolver = resolver or ThemeResolver()
        self.max_workers = get_max_workers(max_workers)
        self.package_prefix = get_package_prefix(package_prefix)
        if not is_package_prefix(self.package_prefix):
            raise ValueError(f"Invalid package prefix '{self.package_prefix}'")

    # -------------------------------------------------------------------------
    # Single target
    # -------------------------------------------------------------------------

    def generate(
        self,
        project: Project,
        target: Target | str,
        options: TargetOptions | dict[str, Any] | None = None,
    ) -> ProjectManifest:
        """Generate the complete file set for one target.

        Args:
            project: Project snapshot.
            target: Target id or platform alias.
            options: Target options.

        Returns:
            ProjectManifest with scaffold, unit, auxiliary and extra files.

        Raises:
            ValueError: If the target is unknown.
            ProjectValidationError: If any instance has fatal errors.
            FileConflictError: If two contents claim one unit name or path.
        """
        target = Target.parse(target)
        options = coerce_options(options)

        report = check_project(project, self.registry)
        report.raise_for_errors()

        display_name = options.app_name or project.display_name
        app_name = to_app_name(display_name)
        namespace = options.package_name or default_namespace(app_name, self.package_prefix)
        bundle_id = options.bundle_id or namespace

        theme_namespace = namespace if target.platform == Platform.ANDROID else ""
        theme = self.resolver.resolve(project.theme, target, namespace=theme_namespace)

        walk = _Walk(target=target, theme=theme, report=report)
        walk.warnings.extend(_warning(e) for e in report.warnings)
        usages = tuple(self._render(instance, walk) for instance in project.capsules)
        fragments = [f for f in walk.fragments if f is not None]

        units = self._dedupe_units(fragments)
        imports = unique(i for f in fragments for i in f.imports)

        assembler = get_assembler(target)
        assembly = assembler.assemble(
            AssemblyInput(
                project=project,
                target=target,
                theme=theme,
                options=options,
                app_name=app_name,
                display_name=display_name,
                namespace=namespace,
                bundle_id=bundle_id,
                units=tuple(units),
                usages=usages,
                imports=tuple(imports),
            )
        )

        files = list(assembly.files)
        files.extend(self._target_files(fragments))
        files.extend(ManifestFile(f.path, f.content, FileKind.SUPPORT) for f in options.extra_files)
        self._check_paths(files)

        logger.debug(
            "Generated %s: %d files, %d units, %d warnings",
            target.value,
            len(files),
            len(units),
            len(walk.warnings),
        )
        return ProjectManifest(
            target=target,
            files=files,
            dependencies=assembly.dependencies,
            entry=assembly.entry,
            warnings=walk.warnings,
        )

    def compile(
        self,
        project: Project,
        target: Target | str,
        options: TargetOptions | dict[str, Any] | None = None,
    ) -> GenerationResult:
        """Generate without raising for engine errors.

        Raises:
            ValueError: If the target is unknown.
        """
        target = Target.parse(target)
        start = time.perf_counter()
        manifest: ProjectManifest | None = None
        error: GenerationError | None = None
        try:
            manifest = self.generate(project, target, options)
        except ProjectValidationError as e:
            error = GenerationError(
                code="ValidationFailed",
                message=str(e),
                details=[err.to_dict() for err in e.errors],
            )
        except FileConflictError as e:
            error = GenerationError(code="FileConflict", message=str(e), details=[{"path": e.path}])

        duration_ms = (time.perf_counter() - start) * 1000
        if error is not None:
            logger.warning("Generation failed for %s: %s", target.value, error.message)
            return GenerationResult(target, GenerationStatus.FAILED, error=error, duration_ms=duration_ms)

        status = (
            GenerationStatus.SUCCEEDED_WITH_WARNINGS
            if manifest.warnings
            else GenerationStatus.SUCCEEDED
        )
        return GenerationResult(target, status, manifest=manifest, duration_ms=duration_ms)

    # -------------------------------------------------------------------------
    # Multiple targets
    # -------------------------------------------------------------------------

    def generate_multi(
        self,
        project: Project,
        targets: list[Target | str | tuple[Target | str, TargetOptions | dict[str, Any] | None]],
    ) -> MultiTargetResult:
        """Generate several targets concurrently.

        Each target runs its own pipeline on a worker thread; one target's
        failure never aborts the others. Duplicate targets are generated
        once (the first request's options win).

        Args:
            project: Project snapshot.
            targets: Target ids, or (target, options) pairs.

        Raises:
            ValueError: If a target is unknown (before any work starts).
        """
        requests: dict[Target, TargetOptions] = {}
        for item in targets:
            target, options = item if isinstance(item, tuple) else (item, None)
            requests.setdefault(Target.parse(target), coerce_options(options))

        completed: dict[Target, GenerationResult] = {}
        workers = max(1, min(self.max_workers, len(requests)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="forge") as executor:
            future_to_target = {
                executor.submit(self._compile_isolated, project, target, options): target
                for target, options in requests.items()
            }
            for future in as_completed(future_to_target):
                completed[future_to_target[future]] = future.result()

        results = {target: completed[target] for target in requests}
        per_target = {target: self._summarize(result) for target, result in results.items()}
        summary = MultiTargetSummary(
            total_platforms=len(results),
            successful_platforms=sum(1 for r in results.values() if r.success),
            failed_platforms=[t.value for t, r in results.items() if not r.success],
            total_files=sum(r.file_count for r in results.values()),
            total_size=sum(r.total_size for r in results.values()),
        )
        logger.info(
            "Generated %d/%d targets (%d files, %d bytes)",
            summary.successful_platforms,
            summary.total_platforms,
            summary.total_files,
            summary.total_size,
        )
        return MultiTargetResult(per_target=per_target, results=results, summary=summary)

    def _compile_isolated(
        self, project: Project, target: Target, options: TargetOptions
    ) -> GenerationResult:
        """compile() that also turns unexpected errors into a failed result."""
        try:
            return self.compile(project, target, options)
        except Exception as e:
            logger.exception("Unexpected error generating %s", target.value)
            return GenerationResult(
                target,
                GenerationStatus.FAILED,
                error=GenerationError(code="InternalError", message=str(e)),
            )

    @staticmethod
    def _summarize(result: GenerationResult) -> TargetSummary:
        errors: list[str] = []
        if result.error is not None:
            errors.append(result.error.message)
            errors.extend(
                f"{d.get('path') or d.get('instanceId')}: {d['message']}"
                for d in result.error.details
                if "message" in d
            )
        return TargetSummary(
            target=result.target,
            success=result.success,
            file_count=result.file_count,
            total_size=result.total_size,
            errors=errors,
            warnings=[w.message for w in result.warnings],
        )

    # -------------------------------------------------------------------------
    # Tree walk
    # -------------------------------------------------------------------------

    def _render(self, instance: ComponentInstance, walk: _Walk) -> str:
        """Emit one instance and its subtree; return the instance's usage.

        A slot is reserved before the children are emitted so units keep
        the depth-first encounter order of their instances.
        """
        slot = len(walk.fragments)
        walk.fragments.append(None)

        definition = self.registry.lookup(instance.type_id)
        render_children = definition is None or definition.accepts_children
        children = (
            tuple(self._render(child, walk) for child in instance.children)
            if render_children
            else ()
        )

        emitter = definition.emitter_for(walk.target) if definition is not None else None
        if emitter is None:
            if definition is not None:
                message = (
                    f"Component type '{instance.type_id}' has no emitter for "
                    f"{walk.target.value}; rendered as a placeholder"
                )
                walk.warnings.append(
                    GenerationWarning(
                        code=ErrorCode.UNSUPPORTED_TARGET.value,
                        message=message,
                        instance_id=instance.id,
                    )
                )
                logger.warning(message)
            else:
                logger.warning(
                    "Unknown component type '%s' (%s); rendered as a placeholder",
                    instance.type_id,
                    instance.id,
                )
            fragment = placeholder_emitter(walk.target).emit(
                placeholder_node(instance.id, instance.type_id, children), walk.theme
            )
            fragment = replace(fragment, placeholder=True)
        else:
            node = RenderNode(
                instance_id=instance.id,
                type_id=instance.type_id,
                values=walk.report.values.get(instance.id, {}),
                schema=definition.schema,
                children=children,
                accepts_children=definition.accepts_children,
            )
            fragment = emitter.emit(node, walk.theme)

        walk.fragments[slot] = fragment
        return fragment.usage

    # -------------------------------------------------------------------------
    # Merging
    # -------------------------------------------------------------------------

    @staticmethod
    def _dedupe_units(fragments: list[SourceFragment]) -> list[UnitSource]:
        units: dict[str, UnitSource] = {}
        for fragment in fragments:
            existing = units.get(fragment.unit_name)
            if existing is None:
                units[fragment.unit_name] = UnitSource(
                    name=fragment.unit_name,
                    body=fragment.body,
                    type_id=fragment.type_id,
                    placeholder=fragment.placeholder,
                )
            elif existing.body != fragment.body:
                raise FileConflictError(
                    fragment.unit_name,
                    f"Unit '{fragment.unit_name}' emitted with different bodies "
                    f"for '{existing.type_id}' and '{fragment.type_id}'",
                )
        return list(units.values())

    @staticmethod
    def _target_files(fragments: list[SourceFragment]) -> list[ManifestFile]:
        files: dict[str, TargetFile] = {}
        for fragment in fragments:
            for target_file in fragment.target_files:
                existing = files.get(target_file.path)
                if existing is None:
                    files[target_file.path] = target_file
                elif existing.content != target_file.content:
                    raise FileConflictError(target_file.path)
        return [ManifestFile(f.path, f.content, f.kind) for f in files.values()]

    @staticmethod
    def _check_paths(files: list[ManifestFile]) -> None:
        seen: set[str] = set()
        for manifest_file in files:
            if manifest_file.path in seen:
                raise FileConflictError(
                    manifest_file.path,
                    f"File '{manifest_file.path}' is produced more than once",
                )
            seen.add(manifest_file.path)


__all__ = [
    "FileConflictError",
    "GenerationStatus",
    "GenerationError",
    "GenerationResult",
    "TargetSummary",
    "MultiTargetSummary",
    "MultiTargetResult",
    "ProjectCompiler",
    "coerce_options",
    "default_namespace",
]
