"""Desktop shells hosting the React frontend.

Tauri adds a Rust crate under src-tauri/; Electron adds a main process
and a preload script under electron/. Both keep the web frontend files
unchanged.
"""

import json
import textwrap

from forge.ir import FileKind, ManifestFile
from forge.schema import Target
from forge.syntax import js_string, to_snake
from forge.targets.lib import AssemblyInput, json_document, register_assembler
from forge.targets.web import ReactAssembler

WINDOW = {"width": 1200, "height": 800, "minWidth": 800, "minHeight": 600}


def toml_string(value: str) -> str:
    """Encode a TOML basic string (JSON escapes are valid TOML escapes)."""
    return json.dumps(value, ensure_ascii=False)


@register_assembler
class TauriAssembler(ReactAssembler):
    """React frontend packaged with Tauri 2."""

    target = Target.DESKTOP_TAURI
    base_dependencies = (
        "react@^18.2.0",
        "react-dom@^18.2.0",
        "@tauri-apps/api@^2.0.0",
    )

    def scripts(self, inp: AssemblyInput) -> dict[str, str]:
        return {
            **super().scripts(inp),
            "tauri": "tauri",
            "tauri:dev": "tauri dev",
            "tauri:build": "tauri build",
        }

    def dev_dependencies(self, inp: AssemblyInput) -> dict[str, str]:
        return {**super().dev_dependencies(inp), "@tauri-apps/cli": "^2.0.0"}

    def vite_config(self, inp: AssemblyInput) -> str:
        return textwrap.dedent(
            """
            import { defineConfig } from "vite";
            import react from "@vitejs/plugin-react";

            export default defineConfig({
              plugins: [react()],
              clearScreen: false,
              server: {
                port: 1420,
                strictPort: true,
                watch: {
                  ignored: ["**/src-tauri/**"],
                },
              },
              build: {
                outDir: "dist",
              },
            });
            """
        ).lstrip()

    def crate_name(self, inp: AssemblyInput) -> str:
        return to_snake(inp.app_name) or "forge_app"

    def cargo_toml(self, inp: AssemblyInput) -> str:
        description = inp.project.description or inp.display_name
        return textwrap.dedent(
            f"""
            [package]
            name = {toml_string(self.crate_name(inp))}
            version = {toml_string(inp.project.version)}
            description = {toml_string(description)}
            edition = "2021"

            [build-dependencies]
            tauri-build = {{ version = "2", features = [] }}

            [dependencies]
            tauri = {{ version = "2", features = [] }}
            serde = {{ version = "1", features = ["derive"] }}
            serde_json = "1"

            [profile.release]
            codegen-units = 1
            lto = true
            opt-level = "s"
            strip = true
            """
        ).lstrip()

    def tauri_conf(self, inp: AssemblyInput) -> str:
        return json_document(
            {
                "$schema": "https://schema.tauri.app/config/2",
                "productName": inp.display_name,
                "version": inp.project.version,
                "identifier": inp.bundle_id,
                "build": {
                    "beforeDevCommand": "npm run dev",
                    "devUrl": "http://localhost:1420",
                    "beforeBuildCommand": "npm run build",
                    "frontendDist": "../dist",
                },
                "app": {
                    "windows": [
                        {
                            "title": inp.display_name,
                            **WINDOW,
                            "resizable": True,
                            "center": True,
                        }
                    ],
                    "security": {"csp": None},
                },
                "bundle": {"active": True, "targets": "all"},
            }
        )

    def shell_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        main_rs = textwrap.dedent(
            """
            // Prevents an extra console window on Windows in release builds
            #![cfg_attr(not(debug_assertions), windows_subsystem = "windows")]

            fn main() {
                tauri::Builder::default()
                    .run(tauri::generate_context!())
                    .expect("error while running tauri application");
            }
            """
        ).lstrip()
        build_rs = "fn main() {\n    tauri_build::build()\n}\n"
        return [
            ManifestFile("src-tauri/Cargo.toml", self.cargo_toml(inp), FileKind.DEPENDENCY_MANIFEST),
            ManifestFile("src-tauri/tauri.conf.json", self.tauri_conf(inp), FileKind.CONFIG),
            ManifestFile("src-tauri/build.rs", build_rs, FileKind.SUPPORT),
            ManifestFile("src-tauri/src/main.rs", main_rs, FileKind.SUPPORT),
        ]

    def gitignore(self, inp: AssemblyInput) -> str:
        return super().gitignore(inp) + "src-tauri/target/\n"


@register_assembler
class ElectronAssembler(ReactAssembler):
    """React frontend packaged with Electron."""

    target = Target.DESKTOP_ELECTRON

    def scripts(self, inp: AssemblyInput) -> dict[str, str]:
        return {
            **super().scripts(inp),
            "electron:dev": "vite build && electron .",
            "electron:start": "electron .",
        }

    def dev_dependencies(self, inp: AssemblyInput) -> dict[str, str]:
        return {**super().dev_dependencies(inp), "electron": "^28.0.0"}

    def package_json(self, inp: AssemblyInput, dependencies: list[str]) -> str:
        data = json.loads(super().package_json(inp, dependencies))
        data["main"] = "electron/main.cjs"
        return json_document(data)

    def vite_config(self, inp: AssemblyInput) -> str:
        # Relative asset paths so the build loads from file://
        return super().vite_config(inp).replace(
            "  plugins: [react()],\n", '  plugins: [react()],\n  base: "./",\n', 1
        )

    def main_cjs(self, inp: AssemblyInput) -> str:
        return textwrap.dedent(
            f"""
            const {{ app, BrowserWindow }} = require("electron");
            const path = require("path");

            function createWindow() {{
              const window = new BrowserWindow({{
                title: {js_string(inp.display_name)},
                width: {WINDOW["width"]},
                height: {WINDOW["height"]},
                minWidth: {WINDOW["minWidth"]},
                minHeight: {WINDOW["minHeight"]},
                webPreferences: {{
                  preload: path.join(__dirname, "preload.cjs"),
                  contextIsolation: true,
                  nodeIntegration: false,
                }},
              }});

              if (process.env.VITE_DEV_SERVER_URL) {{
                window.loadURL(process.env.VITE_DEV_SERVER_URL);
              }} else {{
                window.loadFile(path.join(__dirname, "..", "dist", "index.html"));
              }}
            }}

            app.whenReady().then(() => {{
              createWindow();
              app.on("activate", () => {{
                if (BrowserWindow.getAllWindows().length === 0) createWindow();
              }});
            }});

            app.on("window-all-closed", () => {{
              if (process.platform !== "darwin") app.quit();
            }});
            """
        ).lstrip()

    def shell_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        preload = textwrap.dedent(
            """
            const { contextBridge } = require("electron");

            contextBridge.exposeInMainWorld("forge", {
              platform: process.platform,
              versions: { ...process.versions },
            });
            """
        ).lstrip()
        return [
            ManifestFile("electron/main.cjs", self.main_cjs(inp), FileKind.SUPPORT),
            ManifestFile("electron/preload.cjs", preload, FileKind.SUPPORT),
        ]


__all__ = [
    "TauriAssembler",
    "ElectronAssembler",
    "toml_string",
]
