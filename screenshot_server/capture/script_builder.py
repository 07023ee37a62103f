"""PowerShell script generation for each capture strategy.

Caller-supplied strings never become script syntax: they are bound once
to variables at the top of the script as single-quoted literals (which
PowerShell does not expand) and the strategy bodies only ever refer to
those variables.
"""
from __future__ import annotations

import re
import textwrap

from .strategy import AllMonitors, CaptureStrategy, Monitor, WindowByProcess, WindowByTitle

DEFAULT_WINDOW_PADDING = 10
DEFAULT_SETTLE_DELAY_MS = 200

# PowerShell treats the typographic single quotes as quote characters too.
_SINGLE_QUOTES_RE = re.compile("['‘’‚‛]")

_NATIVE_SETUP = textwrap.dedent(r'''
    Add-Type -AssemblyName System.Windows.Forms
    Add-Type -AssemblyName System.Drawing
    Add-Type @"
    using System;
    using System.Runtime.InteropServices;

    public class ScreenshotNative {
      [DllImport("user32.dll")]
      public static extern bool SetProcessDpiAwarenessContext(IntPtr value);

      [DllImport("user32.dll")]
      public static extern bool SetProcessDPIAware();

      [DllImport("user32.dll")]
      public static extern bool GetWindowRect(IntPtr hWnd, out RECT lpRect);

      [DllImport("user32.dll")]
      public static extern bool SetForegroundWindow(IntPtr hWnd);

      public struct RECT {
        public int Left;
        public int Top;
        public int Right;
        public int Bottom;
      }
    }
    "@

    # Per-monitor DPI awareness (v2), falling back to system-wide awareness
    $dpiAware = $false
    try {
      $dpiAware = [ScreenshotNative]::SetProcessDpiAwarenessContext([IntPtr](-4))
    } catch {
      $dpiAware = $false
    }
    if (-not $dpiAware) {
      [ScreenshotNative]::SetProcessDPIAware() | Out-Null
    }

    function Save-Region([int]$X, [int]$Y, [int]$Width, [int]$Height) {
      $bitmap = New-Object System.Drawing.Bitmap $Width, $Height
      $graphics = [System.Drawing.Graphics]::FromImage($bitmap)
      try {
        $graphics.CopyFromScreen($X, $Y, 0, 0, $bitmap.Size)
        $bitmap.Save($SavePath, [System.Drawing.Imaging.ImageFormat]::Png)
      } finally {
        $graphics.Dispose()
        $bitmap.Dispose()
      }
    }
''')

_ALL_MONITORS_BODY = textwrap.dedent(r'''
    $screen = [System.Windows.Forms.SystemInformation]::VirtualScreen
    Save-Region $screen.Left $screen.Top $screen.Width $screen.Height
    Write-Host 'Screenshot saved successfully'
''')

_MONITOR_BODY = textwrap.dedent(r'''
    $allScreens = [System.Windows.Forms.Screen]::AllScreens
    $targetScreen = $null

    if ($MonitorSelector -eq 'primary') {
      $targetScreen = [System.Windows.Forms.Screen]::PrimaryScreen
    } elseif ($MonitorSelector -match '^\d+$') {
      # Number monitors left to right, whatever order Windows enumerates them in
      $screens = @($allScreens | Sort-Object { $_.Bounds.X }, { $_.Bounds.Y })
      $index = [int]$MonitorSelector - 1
      if ($index -ge 0 -and $index -lt $screens.Count) {
        $targetScreen = $screens[$index]
      } else {
        throw "Monitor $MonitorSelector not found. Available monitors: 1 to $($screens.Count)"
      }
    }

    if ($targetScreen -eq $null) {
      throw "Invalid monitor parameter: $MonitorSelector. Use 'all', 'primary', or 1 to $(@($allScreens).Count)"
    }

    $bounds = $targetScreen.Bounds
    Save-Region $bounds.X $bounds.Y $bounds.Width $bounds.Height
    Write-Host "Screenshot of monitor $MonitorSelector saved successfully"
''')

_WINDOW_LIST = textwrap.dedent(r'''
    $allWindows = @(Get-Process | Where-Object { $_.MainWindowTitle -ne "" })
    Write-Host "Available windows:"
    $allWindows | ForEach-Object { Write-Host "  - $($_.MainWindowTitle) (Process: $($_.ProcessName))" }
''')

_MATCH_BY_TITLE = textwrap.dedent(r'''
    $windows = @($allWindows | Where-Object {
      $_.MainWindowTitle.IndexOf($SearchTerm, [System.StringComparison]::OrdinalIgnoreCase) -ge 0
    })
    if ($windows.Count -eq 0) {
      Write-Host "Search term: '$SearchTerm'"
      throw "No window found with title containing: $SearchTerm"
    }
''')

_MATCH_BY_PROCESS = textwrap.dedent(r'''
    $windows = @($allWindows | Where-Object {
      $_.ProcessName.IndexOf($SearchTerm, [System.StringComparison]::OrdinalIgnoreCase) -ge 0
    })
    if ($windows.Count -eq 0) {
      Write-Host "Search process: '$SearchTerm'"
      throw "No window found for process: $SearchTerm"
    }
''')

_CAPTURE_WINDOW = textwrap.dedent(r'''
    $window = $windows[0]
    $hwnd = $window.MainWindowHandle

    $rect = New-Object ScreenshotNative+RECT
    [ScreenshotNative]::GetWindowRect($hwnd, [ref]$rect) | Out-Null

    # Grow the rectangle to take in borders and drop shadows
    $left = [Math]::Max(0, $rect.Left - $Padding)
    $top = [Math]::Max(0, $rect.Top - $Padding)
    $width = ($rect.Right + $Padding) - $left
    $height = ($rect.Bottom + $Padding) - $top
    if ($width -le 0 -or $height -le 0) {
      throw "Window has no visible area: $($window.MainWindowTitle)"
    }

    [ScreenshotNative]::SetForegroundWindow($hwnd) | Out-Null
    Start-Sleep -Milliseconds $SettleMs

    Save-Region $left $top $width $height
''')


def ps_literal(value: str) -> str:
    """Render ``value`` as a single-quoted PowerShell string literal."""
    return "'" + _SINGLE_QUOTES_RE.sub(lambda m: m.group(0) * 2, value) + "'"


def ps_path_literal(foreign_path: str) -> str:
    """Quote a Windows path, doubling its backslashes."""
    return ps_literal(foreign_path.replace("\\", "\\\\"))


def _assignments(**values) -> str:
    lines = []
    for name, value in values.items():
        if isinstance(value, int):
            lines.append(f"${name} = {value}")
        else:
            lines.append(f"${name} = {ps_literal(value)}")
    return "\n".join(lines) + "\n"


def build_script(
    strategy: CaptureStrategy,
    foreign_path: str,
    padding: int = DEFAULT_WINDOW_PADDING,
    settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS,
) -> str:
    """Return the full PowerShell script that captures ``strategy`` to ``foreign_path``."""
    header = f"$SavePath = {ps_path_literal(foreign_path)}\n"

    if isinstance(strategy, AllMonitors):
        return header + _NATIVE_SETUP + _ALL_MONITORS_BODY

    if isinstance(strategy, Monitor):
        return header + _assignments(MonitorSelector=strategy.selector) + _NATIVE_SETUP + _MONITOR_BODY

    if isinstance(strategy, WindowByTitle):
        matcher, term = _MATCH_BY_TITLE, strategy.title
        done = "Write-Host \"Screenshot of window '$SearchTerm' saved successfully\"\n"
    elif isinstance(strategy, WindowByProcess):
        matcher, term = _MATCH_BY_PROCESS, strategy.process
        done = "Write-Host \"Screenshot of process '$SearchTerm' saved successfully\"\n"
    else:
        raise TypeError(f"Unknown capture strategy: {strategy!r}")

    params = _assignments(SearchTerm=term, Padding=int(padding), SettleMs=int(settle_delay_ms))
    return header + params + _NATIVE_SETUP + _WINDOW_LIST + matcher + _CAPTURE_WINDOW + done
