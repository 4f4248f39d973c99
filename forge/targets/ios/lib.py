"""iOS targets (SwiftUI, UIKit) packaged as a Swift package.

Project layout (App is the PascalCase application name):
    Package.swift
    App/AppApp.swift or App/AppDelegate.swift   entry
    App/Theme/ForgeTheme.swift                  palette, spacing, radii, font sizes
    App/Support/ActionBus.swift                 action dispatch
    App/Components/*.swift                      one file per unit
"""

import textwrap
from abc import abstractmethod

from forge.ir import FileKind, ManifestFile
from forge.schema import Target
from forge.syntax import indent, swift_string
from forge.targets.lib import AssemblyInput, TargetAssembler, UnitSource, register_assembler
from forge.theme import ResolvedStyle

ACTION_BUS = textwrap.dedent(
    """
    import Foundation

    final class ActionBus {
        static let shared = ActionBus()

        private var handlers: [String: (Any?) -> Void] = [:]

        func register(_ action: String, handler: @escaping (Any?) -> Void) {
            handlers[action] = handler
        }

        func dispatch(_ action: String, payload: Any? = nil) {
            guard let handler = handlers[action] else {
                print("[ActionBus] unhandled action \\(action)")
                return
            }
            handler(payload)
        }
    }
    """
).lstrip()

GITIGNORE = ".build/\n.swiftpm/\nDerivedData/\nxcuserdata/\n*.xcuserstate\n"

_DIMENSION_GROUPS = (("Spacing", "spacing"), ("Radius", "radii"), ("FontSize", "font_sizes"))


def swift_theme(theme: ResolvedStyle, framework: str) -> str:
    """ForgeTheme namespace with every token as a static constant."""
    lines = [f"import {framework}", "", "enum ForgeTheme {"]
    for name, literal in theme.color_definitions():
        lines.append(f"    static let {theme.swift_member(name)} = {literal}")
    lines.append("")
    lines.append(f"    static let fontFamily = {swift_string(theme.font_family)}")
    lines.append(f"    static let headingFont = {swift_string(theme.heading_font)}")
    for group, attribute in _DIMENSION_GROUPS:
        lines.append("")
        lines.append(f"    enum {group} {{")
        for name, value in getattr(theme, attribute).items():
            lines.append(
                f"        static let {theme.swift_member(name)}: CGFloat = {theme.dimension_literal(value)}"
            )
        lines.append("    }")
    lines.append("}")
    return "\n".join(lines) + "\n"


def dependency_spec(dependency: str) -> str:
    """Render "url@version" as a SwiftPM package dependency."""
    url, sep, version = dependency.rpartition("@")
    if not sep:
        return f".package(url: {swift_string(dependency)}, branch: \"main\")"
    return f".package(url: {swift_string(url)}, from: {swift_string(version)})"


class SwiftAssembler(TargetAssembler):
    """Files shared by the SwiftUI and UIKit assemblers."""

    framework = "SwiftUI"

    def unit_path(self, inp: AssemblyInput, unit: UnitSource) -> str:
        return f"{inp.app_name}/Components/{unit.name}.swift"

    def package_swift(self, inp: AssemblyInput, dependencies: list[str]) -> str:
        name = swift_string(inp.app_name)
        lines = [
            "// swift-tools-version:5.9",
            "import PackageDescription",
            "",
            "let package = Package(",
            f"    name: {name},",
            f"    platforms: [.iOS({swift_string(inp.options.ios_version)})],",
            f"    products: [.library(name: {name}, targets: [{name}])],",
        ]
        if dependencies:
            lines.append("    dependencies: [")
            lines.extend(f"        {dependency_spec(dep)}," for dep in dependencies)
            lines.append("    ],")
        lines.append(f"    targets: [.target(name: {name}, path: {name})]")
        lines.append(")")
        return "\n".join(lines) + "\n"

    def readme(self, inp: AssemblyInput) -> str:
        lines = [
            f"# {inp.display_name}",
            "",
            f"{self.framework} app for iOS {inp.options.ios_version}+ (bundle id `{inp.bundle_id}`).",
            "",
            "Open `Package.swift` in Xcode and add the sources to an app target.",
            "",
        ]
        if inp.units:
            lines += ["## Components", ""]
            lines += [f"- `{unit.name}` ({unit.type_id})" for unit in inp.units]
            lines.append("")
        return "\n".join(lines)

    @abstractmethod
    def screen_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        """Entry and screen files of the framework."""
        ...

    def scaffold(self, inp: AssemblyInput, dependencies: list[str]) -> list[ManifestFile]:
        app = inp.app_name
        files = [ManifestFile("Package.swift", self.package_swift(inp, dependencies), FileKind.DEPENDENCY_MANIFEST)]
        files.extend(self.screen_files(inp))
        files += [
            ManifestFile(f"{app}/Theme/ForgeTheme.swift", swift_theme(inp.theme, self.framework), FileKind.THEME),
            ManifestFile(f"{app}/Support/ActionBus.swift", ACTION_BUS, FileKind.SUPPORT),
            ManifestFile("README.md", self.readme(inp), FileKind.DOCS),
            ManifestFile(".gitignore", GITIGNORE, FileKind.CONFIG),
        ]
        return files


@register_assembler
class SwiftUIAssembler(SwiftAssembler):
    """SwiftUI app with a scrolling ContentView."""

    target = Target.IOS_SWIFTUI

    def entry_path(self, inp: AssemblyInput) -> str:
        return f"{inp.app_name}/{inp.app_name}App.swift"

    def app_swift(self, inp: AssemblyInput) -> str:
        return textwrap.dedent(
            f"""
            import SwiftUI

            @main
            struct {inp.app_name}App: App {{
                var body: some Scene {{
                    WindowGroup {{
                        ContentView()
                    }}
                }}
            }}
            """
        ).lstrip()

    def content_view(self, inp: AssemblyInput) -> str:
        theme = inp.theme
        lines = [
            "import SwiftUI",
            "",
            "struct ContentView: View {",
            "    var body: some View {",
            "        ScrollView {",
            f"            VStack(alignment: .leading, spacing: {theme.space('md')}) {{",
        ]
        lines.extend(indent(usage, 4) for usage in inp.usages)
        if not inp.usages:
            lines.append("                EmptyView()")
        lines += [
            "            }",
            f"            .padding({theme.space('md')})",
            "        }",
            f"        .background({theme.color('background')})",
            "    }",
            "}",
        ]
        return "\n".join(lines) + "\n"

    def screen_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        return [
            ManifestFile(self.entry_path(inp), self.app_swift(inp), FileKind.ENTRY),
            ManifestFile(f"{inp.app_name}/ContentView.swift", self.content_view(inp), FileKind.SUPPORT),
        ]


@register_assembler
class UIKitAssembler(SwiftAssembler):
    """UIKit app with a scene delegate and a stack-based view controller."""

    target = Target.IOS_UIKIT
    framework = "UIKit"

    def entry_path(self, inp: AssemblyInput) -> str:
        return f"{inp.app_name}/AppDelegate.swift"

    def view_controller(self, inp: AssemblyInput) -> str:
        theme = inp.theme
        views = ",\n".join(indent(usage, 3) for usage in inp.usages)
        subviews = f"[\n{views},\n        ]" if inp.usages else "[]"
        template = textwrap.dedent(
            f"""
            import UIKit

            final class MainViewController: UIViewController {{
                override func viewDidLoad() {{
                    super.viewDidLoad()
                    title = {swift_string(inp.display_name)}
                    view.backgroundColor = {theme.color("background")}

                    let scrollView = UIScrollView()
                    scrollView.translatesAutoresizingMaskIntoConstraints = false
                    view.addSubview(scrollView)

                    let stack = UIStackView(arrangedSubviews: SUBVIEWS)
                    stack.axis = .vertical
                    stack.spacing = {theme.space("md")}
                    stack.translatesAutoresizingMaskIntoConstraints = false
                    scrollView.addSubview(stack)

                    let inset = {theme.space("md")}
                    NSLayoutConstraint.activate([
                        scrollView.topAnchor.constraint(equalTo: view.safeAreaLayoutGuide.topAnchor),
                        scrollView.bottomAnchor.constraint(equalTo: view.bottomAnchor),
                        scrollView.leadingAnchor.constraint(equalTo: view.leadingAnchor),
                        scrollView.trailingAnchor.constraint(equalTo: view.trailingAnchor),
                        stack.topAnchor.constraint(equalTo: scrollView.contentLayoutGuide.topAnchor, constant: inset),
                        stack.bottomAnchor.constraint(equalTo: scrollView.contentLayoutGuide.bottomAnchor, constant: -inset),
                        stack.leadingAnchor.constraint(equalTo: scrollView.frameLayoutGuide.leadingAnchor, constant: inset),
                        stack.trailingAnchor.constraint(equalTo: scrollView.frameLayoutGuide.trailingAnchor, constant: -inset),
                    ])
                }}
            }}
            """
        ).lstrip()
        head, _, tail = template.rpartition("SUBVIEWS")
        return head + subviews + tail

    def screen_files(self, inp: AssemblyInput) -> list[ManifestFile]:
        app_delegate = textwrap.dedent(
            """
            import UIKit

            @main
            final class AppDelegate: UIResponder, UIApplicationDelegate {
                func application(
                    _ application: UIApplication,
                    didFinishLaunchingWithOptions launchOptions: [UIApplication.LaunchOptionsKey: Any]?
                ) -> Bool {
                    true
                }

                func application(
                    _ application: UIApplication,
                    configurationForConnecting connectingSceneSession: UISceneSession,
                    options: UIScene.ConnectionOptions
                ) -> UISceneConfiguration {
                    let configuration = UISceneConfiguration(
                        name: "Default Configuration",
                        sessionRole: connectingSceneSession.role
                    )
                    configuration.delegateClass = SceneDelegate.self
                    return configuration
                }
            }
            """
        ).lstrip()
        scene_delegate = textwrap.dedent(
            """
            import UIKit

            final class SceneDelegate: UIResponder, UIWindowSceneDelegate {
                var window: UIWindow?

                func scene(
                    _ scene: UIScene,
                    willConnectTo session: UISceneSession,
                    options connectionOptions: UIScene.ConnectionOptions
                ) {
                    guard let windowScene = scene as? UIWindowScene else { return }
                    let window = UIWindow(windowScene: windowScene)
                    window.rootViewController = UINavigationController(rootViewController: MainViewController())
                    window.makeKeyAndVisible()
                    self.window = window
                }
            }
            """
        ).lstrip()
        app = inp.app_name
        return [
            ManifestFile(self.entry_path(inp), app_delegate, FileKind.ENTRY),
            ManifestFile(f"{app}/SceneDelegate.swift", scene_delegate, FileKind.SUPPORT),
            ManifestFile(f"{app}/MainViewController.swift", self.view_controller(inp), FileKind.SUPPORT),
        ]


__all__ = [
    "SwiftAssembler",
    "SwiftUIAssembler",
    "UIKitAssembler",
    "swift_theme",
    "dependency_spec",
]
