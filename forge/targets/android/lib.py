"""Android targets (Jetpack Compose, XML views) built with Gradle.

Project layout (pkg is the namespace as a path):
    settings.gradle.kts, build.gradle.kts, gradle.properties
    app/build.gradle.kts                                   dependency manifest
    app/src/main/AndroidManifest.xml
    app/src/main/java/pkg/MainActivity.kt                  entry
    app/src/main/java/pkg/ActionBus.kt                     action dispatch
    app/src/main/java/pkg/ui/theme/ForgeTheme.kt           theme objects
    app/src/main/java/pkg/ui/components/*.kt               one file per unit
    app/src/main/res/values/strings.xml
    app/src/main/res/values/colors.xml, dimens.xml         (android-xml)
    app/src/main/res/layout/activity_main.xml              (android-xml)
"""

import textwrap
from abc import abstractmethod

from forge.ir import FileKind, ManifestFile
from forge.schema import Target
from forge.syntax import android_text, indent, kotlin_string
from forge.targets.lib import AssemblyInput, TargetAssembler, UnitSource, register_assembler
from forge.theme import ResolvedStyle

AGP_VERSION = "8.2.2"
KOTLIN_VERSION = "1.9.22"
COMPOSE_COMPILER = "1.5.10"
COMPILE_SDK = 34

MAIN = "app/src/main"

GRADLE_PROPERTIES = textwrap.dedent(
    """
    org.gradle.jvmargs=-Xmx2048m -Dfile.encoding=UTF-8
    android.useAndroidX=true
    kotlin.code.style=official
    android.nonTransitiveRClass=true
    """
).lstrip()

GITIGNORE = ".gradle/\nbuild/\n/app/build/\nlocal.properties\n.idea/\n*.iml\n.DS_Store\n"

_DIMENSION_GROUPS = (
    ("space", "Spacing", "spacing"),
    ("radius", "Radius", "radii"),
    ("font", "FontSize", "font_sizes"),
)


def action_bus(namespace: str) -> str:
    """Kotlin ActionBus object in the root package."""
    return f"package {namespace}\n\n" + textwrap.dedent(
        """
        import android.util.Log

        object ActionBus {
            private val handlers = mutableMapOf<String, (Any?) -> Unit>()

            fun register(action: String, handler: (Any?) -> Unit) {
                handlers[action] = handler
            }

            fun dispatch(action: String, payload: Any? = null) {
                val handler = handlers[action]
                if (handler == null) {
                    Log.d("ActionBus", "Unhandled action: $action")
                    return
                }
                handler(payload)
            }
        }
        """
    ).lstrip()


def compose_theme(theme: ResolvedStyle, namespace: str) -> str:
    """ForgeColors, ForgeDimens and the ForgeTheme composable."""
    lines = [
        f"package {namespace}.ui.theme",
        "",
        "import androidx.compose.material3.MaterialTheme",
        "import androidx.compose.material3.lightColorScheme",
        "import androidx.compose.runtime.Composable",
        "import androidx.compose.ui.graphics.Color",
        "import androidx.compose.ui.unit.dp",
        "import androidx.compose.ui.unit.sp",
        "",
        "object ForgeColors {",
    ]
    for name, literal in theme.color_definitions():
        lines.append(f"    val {theme.kotlin_member(name)} = {literal}")
    lines += ["}", "", "object ForgeDimens {"]
    for group, prefix, attribute in _DIMENSION_GROUPS:
        for name, value in getattr(theme, attribute).items():
            literal = theme.dimension_literal(value, sp=group == "font")
            lines.append(f"    val {prefix}{theme.kotlin_member(name)} = {literal}")
    lines += [
        "}",
        "",
        "object ForgeFonts {",
        f"    const val Family = {kotlin_string(theme.font_family)}",
        f"    const val Heading = {kotlin_string(theme.heading_font)}",
        "}",
        "",
    ]
    scheme = ", ".join(
        f"{slot} = ForgeColors.{theme.kotlin_member(token)}"
        for slot, token in (
            ("primary", "primary"),
            ("onPrimary", "onPrimary"),
            ("secondary", "secondary"),
            ("background", "background"),
            ("surface", "surface"),
            ("onSurface", "foreground"),
            ("error", "error"),
        )
    )
    lines += [
        "@Composable",
        "fun ForgeTheme(content: @Composable () -> Unit) {",
        "    MaterialTheme(",
        f"        colorScheme = lightColorScheme({scheme}),",
        "        content = content,",
        "    )",
        "}",
    ]
    return "\n".join(lines) + "\n"


def view_theme(theme: ResolvedStyle, namespace: str) -> str:
    """ForgeTheme object resolving color attributes and list attributes at runtime."""
    tokens = "\n".join(
        f"        {kotlin_string(name)} to R.color.{theme.resource_name('color', name)},"
        for name in theme.colors
    )
    fallback = theme.resource_name("color", "foreground")
    return f"package {namespace}.ui.theme\n\n" + textwrap.dedent(
        f"""
        import android.content.Context
        import android.graphics.Color
        import androidx.core.content.ContextCompat
        import {namespace}.R
        import org.json.JSONArray

        object ForgeTheme {{
            private val tokens = mapOf(
        @@TOKENS@@
            )

            fun resolveColor(context: Context, raw: String): Int {{
                val token = tokens[raw]
                if (token != null) return ContextCompat.getColor(context, token)
                return try {{
                    Color.parseColor(raw)
                }} catch (e: IllegalArgumentException) {{
                    ContextCompat.getColor(context, R.color.{fallback})
                }}
            }}

            fun parseList(raw: String?): List<String> {{
                if (raw.isNullOrEmpty()) return emptyList()
                val array = JSONArray(raw)
                return List(array.length()) {{ array.optString(it) }}
            }}
        }}
        """
    ).lstrip().replace("@@TOKENS@@", tokens, 1)


def colors_xml(theme: ResolvedStyle) -> str:
    lines = ['<?xml version="1.0" encoding="utf-8"?>', "<resources>"]
    for name, literal in theme.color_definitions():
        lines.append(f'    <color name="{theme.resource_name("color", name)}">{literal}</color>')
    lines.append("</resources>")
    return "\n".join(lines) + "\n"


def dimens_xml(theme: ResolvedStyle) -> str:
    lines = ['<?xml version="1.0" encoding="utf-8"?>', "<resources>"]
    for group, _, attribute in _DIMENSION_GROUPS:
        for name, value in getattr(theme, attribute).items():
            literal = theme.dimension_literal(value, sp=group == "font")
            lines.append(f'    <dimen name="{theme.resource_name(group, name)}">{literal}</dimen>')
    lines.append("</resources>")
    return "\n".join(lines) + "\n"


def gradle_dependency(coordinate: str) -> str:
    return f"    implementation({kotlin_string(coordinate)})"


class GradleAssembler(TargetAssembler):
    """Gradle project files shared by both Android targets."""

    theme_style = "@android:style/Theme.Material.Light.NoActionBar"

    def source_dir(self, inp: AssemblyInput) -> str:
        return f"{MAIN}/java/{inp.namespace_path}"

    def entry_path(self, inp: AssemblyInput) -> str:
        return f"{self.source_dir(inp)}/MainActivity.kt"

    def unit_path(self, inp: AssemblyInput, unit: UnitSource) -> str:
        return f"{self.source_dir(inp)}/ui/components/{unit.name}.kt"

    def settings_gradle(self, inp: AssemblyInput) -> str:
        return textwrap.dedent(
            f"""
            pluginManagement {{
                repositories {{
                    google()
                    mavenCentral()
                    gradlePluginPortal()
                }}
            }}

            dependencyResolutionManagement {{
                repositoriesMode.set(RepositoriesMode.FAIL_ON_PROJECT_REPOS)
                repositories {{
                    google()
                    mavenCentral()
                }}
            }}

            rootProject.name = {kotlin_string(inp.app_name)}
            include(":app")
            """
        ).lstrip()

    def root_build_gradle(self, inp: AssemblyInput) -> str:
        return textwrap.dedent(
            f"""
            plugins {{
                id("com.android.application") version "{AGP_VERSION}" apply false
                id("org.jetbrains.kotlin.android") version "{KOTLIN_VERSION}" apply false
            }}
            """
        ).lstrip()

    def build_features(self) -> list[str]:
        """Extra lines inside the android block."""
        return []

    def app_build_gradle(self, inp: AssemblyInput, dependencies: list[str]) -> str:
        lines = [
            "plugins {",
            '    id("com.android.application")',
            '    id("org.jetbrains.kotlin.android")',
            "}",
            "",
            "android {",
            f"    namespace = {kotlin_string(inp.namespace)}",
            f"    compileSdk = {COMPILE_SDK}",
            "",
            "    defaultConfig {",
            f"        applicationId = {kotlin_string(inp.namespace)}",
            f"        minSdk = {inp.options.min_sdk}",
            f"        targetSdk = {COMPILE_SDK}",
            "        versionCode = 1",
            f"        versionName = {kotlin_string(inp.project.version)}",
            "    }",
            "",
            "    compileOptions {",
            "        sourceCompatibility = JavaVersion.VERSION_17",
            "        targetCompatibility = JavaVersion.VERSION_17",
            "    }",
            "",
            "    kotlinOptions {",
            '        jvmTarget = "17"',
            "    }",
        ]
        lines.extend(self.build_features())
        lines += ["}", "", "dependencies {"]
        lines.extend(gradle_dependency(dep) for dep in dependencies)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def android_manifest(self, inp: AssemblyInput) -> str:
        return textwrap.dedent(
            f"""
            <?xml version="1.0" encoding="utf-8"?>
            <manifest xmlns:android="http://schemas.android.com/apk/res/android">

                <uses-permission android:name="android.permission.INTERNET" />

                <application
                    android:allowBackup="true"
                    android:label="@string/app_name"
                    android:supportsRtl="true"
                    android:theme="{self.theme_style}">
                    <activity
                        android:name=".MainActivity"
                        android:exported="true">
                        <intent-filter>
                            <action android:name="android.intent.action.MAIN" />
                            <category android:name="android.intent.category.LAUNCHER" />
                        </intent-filter>
                    </activity>
                </application>

            </manifest>
            """
        ).lstrip()

    def strings_xml(self, inp: AssemblyInput) -> str:
        return (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<resources>\n"
            f'    <string name="app_name">{android_text(inp.display_name)}</string>\n'
            "</resources>\n"
        )

    def readme(self, inp: AssemblyInput) -> str:
        lines = [
            f"# {inp.display_name}",
            "",
            f"Android app `{inp.namespace}` (minSdk {inp.options.min_sdk}).",
            "",
            "```bash",
            "./gradlew assembleDebug",
            "```",
            "",
        ]
        if inp.units:
            lines += ["## Components", ""]
            lines += [f"- `{unit.name}` ({unit.type_id})" for unit in inp.units]
            lines.append("")
        return "\n".join(lines)

    @abstractmethod
    def ui_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        """Entry activity, theme and layout files of the UI toolkit."""
        ...

    def scaffold(self, inp: AssemblyInput, dependencies: list[str]) -> list[ManifestFile]:
        files = [
            ManifestFile("settings.gradle.kts", self.settings_gradle(inp), FileKind.CONFIG),
            ManifestFile("build.gradle.kts", self.root_build_gradle(inp), FileKind.CONFIG),
            ManifestFile("gradle.properties", GRADLE_PROPERTIES, FileKind.CONFIG),
            ManifestFile(
                "app/build.gradle.kts",
                self.app_build_gradle(inp, dependencies),
                FileKind.DEPENDENCY_MANIFEST,
            ),
            ManifestFile(f"{MAIN}/AndroidManifest.xml", self.android_manifest(inp), FileKind.CONFIG),
            ManifestFile(f"{MAIN}/res/values/strings.xml", self.strings_xml(inp), FileKind.SUPPORT),
        ]
        files.extend(self.ui_files(inp))
        files.append(ManifestFile(f"{self.source_dir(inp)}/ActionBus.kt", action_bus(inp.namespace), FileKind.SUPPORT))
        files.append(ManifestFile("README.md", self.readme(inp), FileKind.DOCS))
        files.append(ManifestFile(".gitignore", GITIGNORE, FileKind.CONFIG))
        return files


@register_assembler
class ComposeAssembler(GradleAssembler):
    """Jetpack Compose app with a single scrolling column."""

    target = Target.ANDROID_COMPOSE
    base_dependencies = (
        "androidx.core:core-ktx:1.12.0",
        "androidx.activity:activity-compose:1.8.2",
        "androidx.compose.ui:ui:1.6.1",
        "androidx.compose.foundation:foundation:1.6.1",
        "androidx.compose.material3:material3:1.2.0",
    )

    def build_features(self) -> list[str]:
        return [
            "",
            "    buildFeatures {",
            "        compose = true",
            "    }",
            "",
            "    composeOptions {",
            f'        kotlinCompilerExtensionVersion = "{COMPOSE_COMPILER}"',
            "    }",
        ]

    def main_activity(self, inp: AssemblyInput) -> str:
        theme = inp.theme
        namespace = inp.namespace
        lines = [
            f"package {namespace}",
            "",
            "import android.os.Bundle",
            "import androidx.activity.ComponentActivity",
            "import androidx.activity.compose.setContent",
            "import androidx.compose.foundation.background",
            "import androidx.compose.foundation.layout.Arrangement",
            "import androidx.compose.foundation.layout.Column",
            "import androidx.compose.foundation.layout.fillMaxSize",
            "import androidx.compose.foundation.layout.padding",
            "import androidx.compose.foundation.rememberScrollState",
            "import androidx.compose.foundation.verticalScroll",
            "import androidx.compose.ui.Modifier",
            f"import {namespace}.ui.components.*",
            f"import {namespace}.ui.theme.*",
            "",
            "class MainActivity : ComponentActivity() {",
            "    override fun onCreate(savedInstanceState: Bundle?) {",
            "        super.onCreate(savedInstanceState)",
            "        setContent {",
            "            ForgeTheme {",
            "                Column(",
            "                    modifier = Modifier",
            "                        .fillMaxSize()",
            f"                        .background({theme.color('background')})",
            "                        .verticalScroll(rememberScrollState())",
            f"                        .padding({theme.space('md')}),",
            f"                    verticalArrangement = Arrangement.spacedBy({theme.space('md')}),",
            "                ) {",
        ]
        lines.extend(indent(usage, 5) for usage in inp.usages)
        lines += [
            "                }",
            "            }",
            "        }",
            "    }",
            "}",
        ]
        return "\n".join(lines) + "\n"

    def ui_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        source = self.source_dir(inp)
        return [
            ManifestFile(self.entry_path(inp), self.main_activity(inp), FileKind.ENTRY),
            ManifestFile(
                f"{source}/ui/theme/ForgeTheme.kt",
                compose_theme(inp.theme, inp.namespace),
                FileKind.THEME,
            ),
        ]


@register_assembler
class AndroidXmlAssembler(GradleAssembler):
    """View-based app inflating activity_main.xml."""

    target = Target.ANDROID_XML
    theme_style = "@style/Theme.AppCompat.Light.DarkActionBar"
    base_dependencies = (
        "androidx.core:core-ktx:1.12.0",
        "androidx.appcompat:appcompat:1.6.1",
    )

    def main_activity(self, inp: AssemblyInput) -> str:
        return f"package {inp.namespace}\n\n" + textwrap.dedent(
            """
            import android.os.Bundle
            import androidx.appcompat.app.AppCompatActivity

            class MainActivity : AppCompatActivity() {
                override fun onCreate(savedInstanceState: Bundle?) {
                    super.onCreate(savedInstanceState)
                    setContentView(R.layout.activity_main)
                }
            }
            """
        ).lstrip()

    def layout(self, inp: AssemblyInput) -> str:
        theme = inp.theme
        lines = [
            '<?xml version="1.0" encoding="utf-8"?>',
            "<ScrollView",
            '    xmlns:android="http://schemas.android.com/apk/res/android"',
            '    xmlns:app="http://schemas.android.com/apk/res-auto"',
            '    android:layout_width="match_parent"',
            '    android:layout_height="match_parent"',
            f'    android:background="@color/{theme.resource_name("color", "background")}">',
            "",
            "    <LinearLayout",
            '        android:layout_width="match_parent"',
            '        android:layout_height="wrap_content"',
            '        android:orientation="vertical"',
            f'        android:padding="@dimen/{theme.resource_name("space", "md")}">',
            "",
        ]
        lines.extend(indent(usage, 2) + "\n" for usage in inp.usages)
        lines += ["    </LinearLayout>", "", "</ScrollView>"]
        return "\n".join(lines) + "\n"

    def ui_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        source = self.source_dir(inp)
        return [
            ManifestFile(self.entry_path(inp), self.main_activity(inp), FileKind.ENTRY),
            ManifestFile(f"{MAIN}/res/layout/activity_main.xml", self.layout(inp), FileKind.SUPPORT),
            ManifestFile(f"{MAIN}/res/values/colors.xml", colors_xml(inp.theme), FileKind.THEME),
            ManifestFile(f"{MAIN}/res/values/dimens.xml", dimens_xml(inp.theme), FileKind.THEME),
            ManifestFile(
                f"{source}/ui/theme/ForgeTheme.kt",
                view_theme(inp.theme, inp.namespace),
                FileKind.THEME,
            ),
        ]


__all__ = [
    "GradleAssembler",
    "ComposeAssembler",
    "AndroidXmlAssembler",
    "action_bus",
    "compose_theme",
    "view_theme",
    "colors_xml",
    "dimens_xml",
]
