"""
Programming language tags for syntax-highlighted code blocks.

Telegram clients highlight ``<pre><code class="language-xxx">`` (HTML) and
fenced MarkdownV2 blocks (```` ```xxx ````) using libprisma (Prism) grammars.
The language has to be one of libprisma's canonical tags; this module maps
display names and aliases to them.

Usage:
    from tgmarkup.languages import Language, getDefaultRegistry

    registry = getDefaultRegistry()
    registry.normalize("PY")          # -> "python"
    registry.normalize("no-such")     # -> None
    registry.mustNormalize("html")    # -> "markup"
    registry.listCanonicalTags()      # -> ["abap", "abnf", ...]
"""

import logging
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Dict, Final, List, Mapping, Optional, Tuple

from .constants import LANGUAGE_TAG_PATTERN
from .exceptions import UnsupportedLanguageError

logger = logging.getLogger(__name__)


class Language(StrEnum):
    """Canonical libprisma language tags.

    For aliases (e.g. "html", "xml" -> "markup") use LanguageRegistry.normalize().
    """

    MARKUP = "markup"
    CSS = "css"
    CLIKE = "clike"
    REGEX = "regex"
    JAVASCRIPT = "javascript"
    ABAP = "abap"
    ABNF = "abnf"
    ACTIONSCRIPT = "actionscript"
    ADA = "ada"
    AGDA = "agda"
    AL = "al"
    ANTLR4 = "antlr4"
    APACHECONF = "apacheconf"
    SQL = "sql"
    APEX = "apex"
    APL = "apl"
    APPLESCRIPT = "applescript"
    AQL = "aql"
    C = "c"
    CPP = "cpp"
    ARDUINO = "arduino"
    ARFF = "arff"
    ARMASM = "armasm"
    BASH = "bash"
    YAML = "yaml"
    MARKDOWN = "markdown"
    ARTURO = "arturo"
    ASCIIDOC = "asciidoc"
    CSHARP = "csharp"
    ASPNET = "aspnet"
    ASM6502 = "asm6502"
    ASMATMEL = "asmatmel"
    AUTOHOTKEY = "autohotkey"
    AUTOIT = "autoit"
    AVISYNTH = "avisynth"
    AVRO_IDL = "avro-idl"
    AWK = "awk"
    BASIC = "basic"
    BATCH = "batch"
    BBCODE = "bbcode"
    BBJ = "bbj"
    BICEP = "bicep"
    BIRB = "birb"
    BISON = "bison"
    BNF = "bnf"
    BQN = "bqn"
    BRAINFUCK = "brainfuck"
    BRIGHTSCRIPT = "brightscript"
    BRO = "bro"
    CFSCRIPT = "cfscript"
    CHAISCRIPT = "chaiscript"
    CIL = "cil"
    CILKC = "cilkc"
    CILKCPP = "cilkcpp"
    CLOJURE = "clojure"
    CMAKE = "cmake"
    COBOL = "cobol"
    COFFEESCRIPT = "coffeescript"
    CONCURNAS = "concurnas"
    CSP = "csp"
    COOKLANG = "cooklang"
    RUBY = "ruby"
    CRYSTAL = "crystal"
    CSV = "csv"
    CUE = "cue"
    CYPHER = "cypher"
    D = "d"
    DART = "dart"
    DATAWEAVE = "dataweave"
    DAX = "dax"
    DHALL = "dhall"
    DIFF = "diff"
    MARKUP_TEMPLATING = "markup-templating"
    DJANGO = "django"
    DNS_ZONE_FILE = "dns-zone-file"
    DOCKER = "docker"
    DOT = "dot"
    EBNF = "ebnf"
    EDITORCONFIG = "editorconfig"
    EIFFEL = "eiffel"
    EJS = "ejs"
    ELIXIR = "elixir"
    ELM = "elm"
    LUA = "lua"
    ETLUA = "etlua"
    ERB = "erb"
    ERLANG = "erlang"
    EXCEL_FORMULA = "excel-formula"
    FSHARP = "fsharp"
    FACTOR = "factor"
    FALSE = "false"
    FIFT = "fift"
    FIRESTORE_SECURITY_RULES = "firestore-security-rules"
    FLOW = "flow"
    FORTRAN = "fortran"
    FTL = "ftl"
    FUNC = "func"
    GML = "gml"
    GAP = "gap"
    GCODE = "gcode"
    GDSCRIPT = "gdscript"
    GEDCOM = "gedcom"
    GETTEXT = "gettext"
    GIT = "git"
    GLSL = "glsl"
    GN = "gn"
    LINKER_SCRIPT = "linker-script"
    GO = "go"
    GO_MODULE = "go-module"
    GRADLE = "gradle"
    GRAPHQL = "graphql"
    GROOVY = "groovy"
    LESS = "less"
    SCSS = "scss"
    TEXTILE = "textile"
    HAML = "haml"
    HANDLEBARS = "handlebars"
    HASKELL = "haskell"
    HAXE = "haxe"
    HCL = "hcl"
    HLSL = "hlsl"
    HOON = "hoon"
    HPKP = "hpkp"
    HSTS = "hsts"
    JSON = "json"
    URI = "uri"
    HTTP = "http"
    ICHIGOJAM = "ichigojam"
    ICON = "icon"
    ICU_MESSAGE_FORMAT = "icu-message-format"
    IDRIS = "idris"
    IGNORE = "ignore"
    INFORM7 = "inform7"
    INI = "ini"
    IO = "io"
    J = "j"
    JAVA = "java"
    SCALA = "scala"
    PHP = "php"
    JAVADOCLIKE = "javadoclike"
    JAVADOC = "javadoc"
    JAVASTACKTRACE = "javastacktrace"
    JOLIE = "jolie"
    JQ = "jq"
    TYPESCRIPT = "typescript"
    JSDOC = "jsdoc"
    N4JS = "n4js"
    JSON5 = "json5"
    JSONP = "jsonp"
    JSSTACKTRACE = "jsstacktrace"
    JULIA = "julia"
    KEEPALIVED = "keepalived"
    KEYMAN = "keyman"
    KOTLIN = "kotlin"
    KUSTO = "kusto"
    LATEX = "latex"
    LATTE = "latte"
    SCHEME = "scheme"
    LILYPOND = "lilypond"
    LIQUID = "liquid"
    LISP = "lisp"
    LIVESCRIPT = "livescript"
    LLVM = "llvm"
    LOG = "log"
    LOLCODE = "lolcode"
    MAGMA = "magma"
    MAKEFILE = "makefile"
    MATA = "mata"
    MATLAB = "matlab"
    MAXSCRIPT = "maxscript"
    MEL = "mel"
    MERMAID = "mermaid"
    METAFONT = "metafont"
    MIZAR = "mizar"
    MONGODB = "mongodb"
    MONKEY = "monkey"
    MOONSCRIPT = "moonscript"
    N1QL = "n1ql"
    NAND2TETRIS_HDL = "nand2tetris-hdl"
    NANISCRIPT = "naniscript"
    NASM = "nasm"
    NEON = "neon"
    NEVOD = "nevod"
    NGINX = "nginx"
    NIM = "nim"
    NIX = "nix"
    NSIS = "nsis"
    OBJECTIVEC = "objectivec"
    OCAML = "ocaml"
    ODIN = "odin"
    OPENCL = "opencl"
    OPENQASM = "openqasm"
    OZ = "oz"
    PARIGP = "parigp"
    PARSER = "parser"
    PASCAL = "pascal"
    PASCALIGO = "pascaligo"
    PSL = "psl"
    PCAXIS = "pcaxis"
    PEOPLECODE = "peoplecode"
    PERL = "perl"
    PHPDOC = "phpdoc"
    PLANT_UML = "plant-uml"
    PLSQL = "plsql"
    POWERQUERY = "powerquery"
    POWERSHELL = "powershell"
    PROCESSING = "processing"
    PROLOG = "prolog"
    PROMQL = "promql"
    PROPERTIES = "properties"
    PROTOBUF = "protobuf"
    STYLUS = "stylus"
    TWIG = "twig"
    PUG = "pug"
    PUPPET = "puppet"
    PUREBASIC = "purebasic"
    PYTHON = "python"
    QSHARP = "qsharp"
    Q = "q"
    QML = "qml"
    QORE = "qore"
    R = "r"
    RACKET = "racket"
    CSHTML = "cshtml"
    JSX = "jsx"
    TSX = "tsx"
    REASON = "reason"
    REGO = "rego"
    RENPY = "renpy"
    RESCRIPT = "rescript"
    REST = "rest"
    RIP = "rip"
    ROBOCONF = "roboconf"
    ROBOTFRAMEWORK = "robotframework"
    RUST = "rust"
    SAS = "sas"
    SASS = "sass"
    SHELL_SESSION = "shell-session"
    SMALI = "smali"
    SMALLTALK = "smalltalk"
    SMARTY = "smarty"
    SML = "sml"
    SOLIDITY = "solidity"
    SOLUTION_FILE = "solution-file"
    SOY = "soy"
    SPLUNK_SPL = "splunk-spl"
    SQF = "sqf"
    SQUIRREL = "squirrel"
    STAN = "stan"
    STATA = "stata"
    IECST = "iecst"
    SUPERCOLLIDER = "supercollider"
    SWIFT = "swift"
    SYSTEMD = "systemd"
    TACT = "tact"
    T4_TEMPLATING = "t4-templating"
    T4_CS = "t4-cs"
    VBNET = "vbnet"
    T4_VB = "t4-vb"
    TAP = "tap"
    TCL = "tcl"
    TT2 = "tt2"
    TOML = "toml"
    TREMOR = "tremor"
    TL = "tl"
    TLB = "tlb"
    TYPOSCRIPT = "typoscript"
    UNREALSCRIPT = "unrealscript"
    UORAZOR = "uorazor"
    V = "v"
    VALA = "vala"
    VELOCITY = "velocity"
    VERILOG = "verilog"
    VHDL = "vhdl"
    VIM = "vim"
    VISUAL_BASIC = "visual-basic"
    WARPSCRIPT = "warpscript"
    WASM = "wasm"
    WEB_IDL = "web-idl"
    WGSL = "wgsl"
    WIKI = "wiki"
    WOLFRAM = "wolfram"
    WREN = "wren"
    XEORA = "xeora"
    XOJO = "xojo"
    XQUERY = "xquery"
    YANG = "yang"
    ZIG = "zig"


LIBPRISMA_TABLE: Final[str] = """
Markup	markup,markup,html,xml,svg,mathml,ssml,atom,rss
CSS	css
C-like	clike
Regex	regex
JavaScript	javascript,js
ABAP	abap
ABNF	abnf
ActionScript	actionscript
Ada	ada
Agda	agda
AL	al
ANTLR4	antlr4,g4
Apache Configuration	apacheconf
SQL	sql
Apex	apex
APL	apl
AppleScript	applescript
AQL	aql
C	c
C++	cpp
Arduino	arduino,ino
ARFF	arff
ARM Assembly	armasm,arm-asm
Bash	bash,bash,sh,shell
YAML	yaml,yml
Markdown	markdown,md
Arturo	arturo,art
AsciiDoc	asciidoc,adoc
C#	csharp,csharp,cs,dotnet
ASP.NET (C#)	aspnet
6502 Assembly	asm6502
Atmel AVR Assembly	asmatmel
AutoHotkey	autohotkey
AutoIt	autoit
AviSynth	avisynth,avs
Avro IDL	avro-idl,avdl
AWK	awk,gawk
BASIC	basic
Batch	batch
BBcode	bbcode,shortcode
BBj	bbj
Bicep	bicep
Birb	birb
Bison	bison
BNF	bnf,rbnf
BQN	bqn
Brainfuck	brainfuck
BrightScript	brightscript
Bro	bro
CFScript	cfscript,cfc
ChaiScript	chaiscript
CIL	cil
Cilk/C	cilkc,cilk-c
Cilk/C++	cilkcpp,cilkcpp,cilk-cpp,cilk
Clojure	clojure
CMake	cmake
COBOL	cobol
CoffeeScript	coffeescript,coffee
Concurnas	concurnas,conc
Content-Security-Policy	csp
Cooklang	cooklang
Ruby	ruby,rb
Crystal	crystal
CSV	csv
CUE	cue
Cypher	cypher
D	d
Dart	dart
DataWeave	dataweave
DAX	dax
Dhall	dhall
Diff	diff
Markup templating	markup-templating
Django/Jinja2	django,jinja2
DNS zone file	dns-zone-file,dns-zone
Docker	docker,dockerfile
DOT (Graphviz)	dot,gv
EBNF	ebnf
EditorConfig	editorconfig
Eiffel	eiffel
EJS	ejs,eta
Elixir	elixir
Elm	elm
Lua	lua
Embedded Lua templating	etlua
ERB	erb
Erlang	erlang
Excel Formula	excel-formula,excel-formula,xlsx,xls
F#	fsharp
Factor	factor
False	false
Fift	fift
Firestore security rules	firestore-security-rules
Flow	flow
Fortran	fortran
FreeMarker Template Language	ftl
FunC	func
GameMaker Language	gml,gamemakerlanguage
GAP (CAS)	gap
G-code	gcode
GDScript	gdscript
GEDCOM	gedcom
gettext	gettext,po
Git	git
GLSL	glsl
GN	gn,gni
GNU Linker Script	linker-script,ld
Go	go
Go module	go-module,go-mod
Gradle	gradle
GraphQL	graphql
Groovy	groovy
Less	less
Sass (SCSS)	scss
Textile	textile
Haml	haml
Handlebars	handlebars,handlebars,hbs,mustache
Haskell	haskell,hs
Haxe	haxe
HCL	hcl
HLSL	hlsl
Hoon	hoon
HTTP Public-Key-Pins	hpkp
HTTP Strict-Transport-Security	hsts
JSON	json,webmanifest
URI	uri,url
HTTP	http
IchigoJam	ichigojam
Icon	icon
ICU Message Format	icu-message-format
Idris	idris,idr
.ignore	ignore,ignore,gitignore,hgignore,npmignore
Inform 7	inform7
Ini	ini
Io	io
J	j
Java	java
Scala	scala
PHP	php
JavaDoc-like	javadoclike
JavaDoc	javadoc
Java stack trace	javastacktrace
Jolie	jolie
JQ	jq
TypeScript	typescript,ts
JSDoc	jsdoc
N4JS	n4js,n4jsd
JSON5	json5
JSONP	jsonp
JS stack trace	jsstacktrace
Julia	julia
Keepalived Configure	keepalived
Keyman	keyman
Kotlin	kotlin,kotlin,kt,kts
Kusto	kusto
LaTeX	latex,latex,tex,context
Latte	latte
Scheme	scheme
LilyPond	lilypond,ly
Liquid	liquid
Lisp	lisp,lisp,emacs,elisp,emacs-lisp
LiveScript	livescript
LLVM IR	llvm
Log file	log
LOLCODE	lolcode
Magma (CAS)	magma
Makefile	makefile
Mata	mata
MATLAB	matlab
MAXScript	maxscript
MEL	mel
Mermaid	mermaid
METAFONT	metafont
Mizar	mizar
MongoDB	mongodb
Monkey	monkey
MoonScript	moonscript,moon
N1QL	n1ql
Nand To Tetris HDL	nand2tetris-hdl
Naninovel Script	naniscript,nani
NASM	nasm
NEON	neon
Nevod	nevod
nginx	nginx
Nim	nim
Nix	nix
NSIS	nsis
Objective-C	objectivec,objc
OCaml	ocaml
Odin	odin
OpenCL	opencl
OpenQasm	openqasm,qasm
Oz	oz
PARI/GP	parigp
Parser	parser
Pascal	pascal,objectpascal
Pascaligo	pascaligo
PATROL Scripting Language	psl
PC-Axis	pcaxis,px
PeopleCode	peoplecode,pcode
Perl	perl
PHPDoc	phpdoc
PlantUML	plant-uml,plantuml
PL/SQL	plsql
PowerQuery	powerquery,powerquery,pq,mscript
PowerShell	powershell
Processing	processing
Prolog	prolog
PromQL	promql
.properties	properties
Protocol Buffers	protobuf
Stylus	stylus
Twig	twig
Pug	pug
Puppet	puppet
PureBasic	purebasic,pbfasm
Python	python,py
Q#	qsharp,qs
Q (kdb+ database)	q
QML	qml
Qore	qore
R	r
Racket	racket,rkt
Razor C#	cshtml,razor
React JSX	jsx
React TSX	tsx
Reason	reason
Rego	rego
Ren'py	renpy,rpy
ReScript	rescript,res
reST (reStructuredText)	rest
Rip	rip
Roboconf	roboconf
Robot Framework	robotframework,robot
Rust	rust
SAS	sas
Sass (Sass)	sass
Shell session	shell-session,shell-session,sh-session,shellsession
Smali	smali
Smalltalk	smalltalk
Smarty	smarty
SML	sml,smlnj
Solidity (Ethereum)	solidity,sol
Solution file	solution-file,sln
Soy (Closure Template)	soy
Splunk SPL	splunk-spl
SQF: Status Quo Function (Arma 3)	sqf
Squirrel	squirrel
Stan	stan
Stata Ado	stata
Structured Text (IEC 61131-3)	iecst
SuperCollider	supercollider,sclang
Swift	swift
Systemd configuration file	systemd
Tact	tact
T4 templating	t4-templating
T4 Text Templates (C#)	t4-cs,t4
VB.Net	vbnet
T4 Text Templates (VB)	t4-vb
TAP	tap
Tcl	tcl
Template Toolkit 2	tt2
TOML	toml
Tremor	tremor,tremor,trickle,troy
Type Language	tl
Type Language - Binary	tlb
TypoScript	typoscript,tsconfig
UnrealScript	unrealscript,unrealscript,uscript,uc
UO Razor Script	uorazor
V	v
Vala	vala
Velocity	velocity
Verilog	verilog
VHDL	vhdl
vim	vim
Visual Basic	visual-basic,visual-basic,vb,vba
WarpScript	warpscript
WebAssembly	wasm
Web IDL	web-idl,webidl
WGSL	wgsl
Wiki markup	wiki
Wolfram language	wolfram,wolfram,mathematica,nb,wl
Wren	wren
Xeora	xeora,xeoracube
Xojo (REALbasic)	xojo
XQuery	xquery
YANG	yang
Zig	zig
"""
"""The "Supported languages" table from https://github.com/TelegramMessenger/libprisma#supported-languages

One row per line: ``<display name>\\t<aliases csv>``; the first alias of a row is its canonical tag.
"""

DEFAULT_ALIAS_OVERRIDES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "html": Language.MARKUP,
        "xml": Language.MARKUP,
        "svg": Language.MARKUP,
        "js": Language.JAVASCRIPT,
        "ts": Language.TYPESCRIPT,
        "py": Language.PYTHON,
        "go-mod": Language.GO_MODULE,
        "go-module": Language.GO_MODULE,
        "c++": Language.CPP,
    }
)
"""Well-known alternates merged over the table; they win on collision."""


def _normalizeKey(value: Any) -> str:
    return str(value).strip().lower()


class LanguageRegistry:
    """
    Read-only mapping from language aliases to canonical tags.

    Build it once (usually via fromTable()) and share it: the mapping can't be
    changed after construction, so lookups are safe from any thread.
    """

    __slots__ = ("_aliases", "_displayNames", "_canonicalTags")

    def __init__(self, aliases: Mapping[str, str], displayNames: Optional[Mapping[str, str]] = None):
        """
        Initialize the registry.

        Args:
            aliases: Mapping of lowercase alias to canonical tag (copied)
            displayNames: Optional mapping of canonical tag to human-readable name (copied)
        """
        self._aliases: Mapping[str, str] = MappingProxyType(dict(aliases))
        self._displayNames: Mapping[str, str] = MappingProxyType(dict(displayNames or {}))
        self._canonicalTags: Tuple[str, ...] = tuple(sorted(set(self._aliases.values())))

    @classmethod
    def fromTable(
        cls, table: str = LIBPRISMA_TABLE, overrides: Optional[Mapping[str, str]] = None
    ) -> "LanguageRegistry":
        """
        Parse a language table and merge alias overrides into one registry.

        Args:
            table: Rows of ``<display name>\\t<aliases csv>``; malformed rows are skipped
            overrides: alias -> canonical tag pairs applied after the bulk load
                (DEFAULT_ALIAS_OVERRIDES when None, pass {} for none at all)

        Returns:
            New registry
        """
        aliases: Dict[str, str] = {}
        displayNames: Dict[str, str] = {}

        for lineNo, line in enumerate(table.splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            parts = line.split("\t")
            if len(parts) != 2:
                logger.debug(f"Skipping malformed language row {lineNo}: {line!r}")
                continue

            displayName, aliasesCsv = parts
            keys = [key for key in (_normalizeKey(token) for token in aliasesCsv.split(",")) if key]
            if not keys:
                continue
            canonical = keys[0]
            if not LANGUAGE_TAG_PATTERN.fullmatch(canonical):
                logger.debug(f"Skipping language row {lineNo}: {canonical!r} is not a usable tag")
                continue
            displayNames.setdefault(canonical, displayName.strip())
            for key in keys:
                aliases[key] = canonical

        knownTags = set(aliases.values())
        if overrides is None:
            overrides = DEFAULT_ALIAS_OVERRIDES
        for alias, target in overrides.items():
            key = _normalizeKey(alias)
            tag = _normalizeKey(target)
            if not key or not tag:
                logger.warning(f"Ignoring empty language override {alias!r} -> {target!r}")
                continue
            if not LANGUAGE_TAG_PATTERN.fullmatch(tag):
                logger.warning(f"Ignoring language override {key!r}: {tag!r} is not a usable tag")
                continue
            if tag not in knownTags:
                logger.warning(f"Language override {key!r} points to {tag!r} which is not in the table")
            aliases[key] = tag

        registry = cls(aliases, displayNames)
        logger.debug(f"Language registry built: {len(registry)} aliases, {len(registry.listCanonicalTags())} tags")
        return registry

    @property
    def aliases(self) -> Mapping[str, str]:
        """Read-only alias -> canonical tag mapping."""
        return self._aliases

    def normalize(self, value: Optional[str]) -> Optional[str]:
        """
        Resolve a language name or alias to its canonical tag.

        Input is trimmed and lowercased before lookup.

        Args:
            value: Language tag, alias or Language member

        Returns:
            Canonical tag, or None if the language is not supported
        """
        if value is None:
            return None
        key = _normalizeKey(value)
        if not key:
            return None
        return self._aliases.get(key)

    def mustNormalize(self, value: Optional[str]) -> str:
        """
        Resolve a language name or alias, failing loudly when it is unknown.

        Raises:
            UnsupportedLanguageError: If the language is not supported
        """
        tag = self.normalize(value)
        if tag is None:
            raise UnsupportedLanguageError(value)
        return tag

    def listCanonicalTags(self) -> List[str]:
        """Get sorted list of all distinct canonical tags."""
        return list(self._canonicalTags)

    def aliasesFor(self, value: str) -> List[str]:
        """Get sorted list of every alias (canonical tag included) resolving to the same tag as value."""
        tag = self.normalize(value)
        if tag is None:
            return []
        return sorted(alias for alias, target in self._aliases.items() if target == tag)

    def displayName(self, value: str) -> Optional[str]:
        """Get human-readable language name for a tag or alias, if the table provides one."""
        tag = self.normalize(value)
        if tag is None:
            return None
        return self._displayNames.get(tag)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and self.normalize(value) is not None

    def __len__(self) -> int:
        return len(self._aliases)

    def __repr__(self) -> str:
        return f"LanguageRegistry(aliases={len(self._aliases)}, tags={len(self._canonicalTags)})"


_defaultRegistry: Final[LanguageRegistry] = LanguageRegistry.fromTable()


def getDefaultRegistry() -> LanguageRegistry:
    """Get registry built from the libprisma table and DEFAULT_ALIAS_OVERRIDES at import time."""
    return _defaultRegistry


def normalizeLanguage(value: Optional[str], registry: Optional[LanguageRegistry] = None) -> Optional[str]:
    """Resolve language via registry (default one if not given), None if unsupported."""
    return (registry if registry is not None else _defaultRegistry).normalize(value)


def mustNormalizeLanguage(value: Optional[str], registry: Optional[LanguageRegistry] = None) -> str:
    """Resolve language via registry (default one if not given), raise UnsupportedLanguageError if unsupported."""
    return (registry if registry is not None else _defaultRegistry).mustNormalize(value)


def supportedLanguages(registry: Optional[LanguageRegistry] = None) -> List[str]:
    """Get sorted list of canonical tags known to the registry (default one if not given)."""
    return (registry if registry is not None else _defaultRegistry).listCanonicalTags()
