"""React web target (Vite + TypeScript).

Also the frontend the desktop shells host: the desktop assemblers extend
ReactAssembler with their shell files.

Project layout:
    package.json, index.html, vite.config.ts, tsconfig.json
    src/main.tsx          entry, mounts <App />
    src/App.tsx           the screen, one usage per top-level capsule
    src/theme.css         CSS custom properties for every token
    src/actions.ts        action dispatch used by interactive units
    src/components/*.tsx  one file per unit, re-exported by index.ts
"""

import textwrap

from forge.ir import FileKind, ManifestFile
from forge.schema import Target
from forge.syntax import indent, to_kebab, xml_text
from forge.targets.lib import AssemblyInput, TargetAssembler, UnitSource, json_document, register_assembler
from forge.theme import ResolvedStyle

DEV_DEPENDENCIES = {
    "@types/react": "^18.2.0",
    "@types/react-dom": "^18.2.0",
    "@vitejs/plugin-react": "^4.2.0",
    "typescript": "^5.3.0",
    "vite": "^5.0.0",
}

ACTIONS_TS = textwrap.dedent(
    """
    export type ActionHandler = (payload?: unknown) => void;

    const handlers = new Map<string, ActionHandler>();

    export function registerAction(action: string, handler: ActionHandler): () => void {
      handlers.set(action, handler);
      return () => {
        handlers.delete(action);
      };
    }

    export function dispatch(action: string, payload?: unknown): void {
      const handler = handlers.get(action);
      if (!handler) {
        console.info(`[actions] unhandled action "${action}"`, payload);
        return;
      }
      handler(payload);
    }
    """
).lstrip()

MAIN_TSX = textwrap.dedent(
    """
    import React from "react";
    import ReactDOM from "react-dom/client";
    import App from "./App";
    import "./theme.css";

    ReactDOM.createRoot(document.getElementById("root")!).render(
      <React.StrictMode>
        <App />
      </React.StrictMode>,
    );
    """
).lstrip()

TSCONFIG = {
    "compilerOptions": {
        "target": "ES2020",
        "useDefineForClassFields": True,
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "module": "ESNext",
        "skipLibCheck": True,
        "moduleResolution": "bundler",
        "resolveJsonModule": True,
        "isolatedModules": True,
        "noEmit": True,
        "jsx": "react-jsx",
        "strict": True,
        "noFallthroughCasesInSwitch": True,
    },
    "include": ["src"],
}

GITIGNORE = "node_modules/\ndist/\n.vite/\n*.log\n"


def npm_spec(dependency: str) -> tuple[str, str]:
    """Split "name@version" (scoped names allowed); version defaults to latest.

    Example:
        >>> npm_spec("@tauri-apps/api@^2.0.0")
        ('@tauri-apps/api', '^2.0.0')
    """
    name, sep, version = dependency.rpartition("@")
    if not sep or not name:
        return dependency, "latest"
    return name, version


def css_string(value: str) -> str:
    """Encode a CSS string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\a ")
    return f'"{escaped}"'


def theme_css(theme: ResolvedStyle) -> str:
    """Stylesheet defining every token as a CSS custom property."""
    lines = [":root {"]
    for name, value in theme.colors.items():
        lines.append(f"  {theme.css_var('color', name)}: {value};")
    for group, table in (("space", theme.spacing), ("radius", theme.radii), ("font", theme.font_sizes)):
        for name, value in table.items():
            lines.append(f"  {theme.css_var(group, name)}: {theme.dimension_literal(value)};")
    lines.append(f"  --font-family: {css_string(theme.font_family)}, system-ui, sans-serif;")
    lines.append(f"  --font-family-heading: {css_string(theme.heading_font)}, system-ui, sans-serif;")
    lines.append("}")
    lines.append("")
    lines.append(
        textwrap.dedent(
            """
            *,
            *::before,
            *::after {
              box-sizing: border-box;
            }

            body {
              margin: 0;
              font-family: var(--font-family);
              font-size: var(--font-body);
              background: var(--color-background);
              color: var(--color-foreground);
            }

            .forge-app {
              display: flex;
              flex-direction: column;
              gap: var(--space-md);
              max-width: 960px;
              margin: 0 auto;
              padding: var(--space-lg);
            }
            """
        ).strip("\n")
    )
    return "\n".join(lines) + "\n"


@register_assembler
class ReactAssembler(TargetAssembler):
    """Vite + React + TypeScript single-page app."""

    target = Target.WEB_REACT
    base_dependencies = ("react@^18.2.0", "react-dom@^18.2.0")

    def entry_path(self, inp: AssemblyInput) -> str:
        return "src/main.tsx"

    def unit_path(self, inp: AssemblyInput, unit: UnitSource) -> str:
        return f"src/components/{unit.name}.tsx"

    def package_name(self, inp: AssemblyInput) -> str:
        return to_kebab(inp.display_name) or "forge-app"

    def scripts(self, inp: AssemblyInput) -> dict[str, str]:
        return {"dev": "vite", "build": "tsc && vite build", "preview": "vite preview"}

    def dev_dependencies(self, inp: AssemblyInput) -> dict[str, str]:
        return dict(DEV_DEPENDENCIES)

    def package_json(self, inp: AssemblyInput, dependencies: list[str]) -> str:
        data: dict = {
            "name": self.package_name(inp),
            "private": True,
            "version": inp.project.version,
        }
        if inp.project.description:
            data["description"] = inp.project.description
        data["type"] = "module"
        data["scripts"] = self.scripts(inp)
        data["dependencies"] = dict(npm_spec(dep) for dep in dependencies)
        data["devDependencies"] = self.dev_dependencies(inp)
        return json_document(data)

    def vite_config(self, inp: AssemblyInput) -> str:
        return textwrap.dedent(
            """
            import { defineConfig } from "vite";
            import react from "@vitejs/plugin-react";

            export default defineConfig({
              plugins: [react()],
              server: {
                port: 3000,
              },
              build: {
                outDir: "dist",
                sourcemap: true,
              },
            });
            """
        ).lstrip()

    def index_html(self, inp: AssemblyInput) -> str:
        return textwrap.dedent(
            f"""
            <!doctype html>
            <html lang="en">
              <head>
                <meta charset="UTF-8" />
                <meta name="viewport" content="width=device-width, initial-scale=1.0" />
                <title>{xml_text(inp.display_name)}</title>
              </head>
              <body>
                <div id="root"></div>
                <script type="module" src="/src/main.tsx"></script>
              </body>
            </html>
            """
        ).lstrip()

    def app_tsx(self, inp: AssemblyInput) -> str:
        lines: list[str] = []
        if inp.units:
            lines.append(f'import {{ {", ".join(inp.unit_names)} }} from "./components";')
            lines.append("")
        lines.append("export default function App() {")
        if inp.usages:
            lines.append("  return (")
            lines.append('    <main className="forge-app">')
            lines.extend(indent(usage, 3, "  ") for usage in inp.usages)
            lines.append("    </main>")
            lines.append("  );")
        else:
            lines.append('  return <main className="forge-app" />;')
        lines.append("}")
        return "\n".join(lines) + "\n"

    def components_index(self, inp: AssemblyInput) -> str:
        return "".join(f'export * from "./{name}";\n' for name in inp.unit_names)

    def readme(self, inp: AssemblyInput) -> str:
        lines = [f"# {inp.display_name}", ""]
        if inp.project.description:
            lines += [inp.project.description, ""]
        lines += ["## Development", "", "```bash", "npm install"]
        lines += [f"npm run {script}" for script in self.scripts(inp)]
        lines += ["```", ""]
        if inp.units:
            lines += ["## Components", ""]
            lines += [f"- `{unit.name}` ({unit.type_id})" for unit in inp.units]
            lines.append("")
        return "\n".join(lines)

    def shell_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        """Files of a native shell hosting the frontend."""
        return []

    def scaffold(self, inp: AssemblyInput, dependencies: list[str]) -> list[ManifestFile]:
        files = [
            ManifestFile("package.json", self.package_json(inp, dependencies), FileKind.DEPENDENCY_MANIFEST),
            ManifestFile("index.html", self.index_html(inp), FileKind.SUPPORT),
            ManifestFile("vite.config.ts", self.vite_config(inp), FileKind.CONFIG),
            ManifestFile("tsconfig.json", json_document(TSCONFIG), FileKind.CONFIG),
            ManifestFile(self.entry_path(inp), MAIN_TSX, FileKind.ENTRY),
            ManifestFile("src/App.tsx", self.app_tsx(inp), FileKind.SUPPORT),
            ManifestFile("src/theme.css", theme_css(inp.theme), FileKind.THEME),
            ManifestFile("src/actions.ts", ACTIONS_TS, FileKind.SUPPORT),
            ManifestFile("src/components/index.ts", self.components_index(inp), FileKind.SUPPORT),
        ]
        files.extend(self.shell_files(inp))
        files.append(ManifestFile("README.md", self.readme(inp), FileKind.DOCS))
        files.append(ManifestFile(".gitignore", self.gitignore(inp), FileKind.CONFIG))
        return files

    def gitignore(self, inp: AssemblyInput) -> str:
        return GITIGNORE


__all__ = [
    "ReactAssembler",
    "npm_spec",
    "css_string",
    "theme_css",
]
