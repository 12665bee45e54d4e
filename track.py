#!/usr/bin/env python3
"""Project Activity Tracker - Main CLI Entry Point"""

import sys
import time
import argparse
from pathlib import Path

from rich.console import Console

from devtracker.config import config
from devtracker.errors import StartupError
from devtracker.project import language_stats, read_dependencies
from devtracker.reporter import reporter
from devtracker.session import TrackingSession
from devtracker.watcher import ProjectWatcher
from devtracker import ui


console = Console()


class TrackerCLI:
    """Main CLI application"""

    def __init__(self):
        self.session = None
        self.watcher = None

    def run(self, args):
        """Main entry point"""
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)

        if not hasattr(parsed_args, 'func'):
            # No command specified, track the current directory
            self.cmd_start(parser.parse_args(['start']))
        else:
            parsed_args.func(parsed_args)

    def create_parser(self):
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            description='Project Activity Tracker - per-file edit statistics for a work session',
            prog='track'
        )

        subparsers = parser.add_subparsers(title='commands', dest='command')

        start_parser = subparsers.add_parser('start', help='Track a project until Ctrl+C')
        start_parser.add_argument('path', nargs='?', default='.', help='Project directory (default: current)')
        start_parser.add_argument('--output', '-o', help=f'Report file (default: {config.report_path})')
        start_parser.add_argument('--idle-minutes', type=int, help='Idle threshold in minutes')
        start_parser.add_argument('--quiet', '-q', action='store_true', help='Only print warnings and errors while tracking')
        start_parser.set_defaults(func=self.cmd_start)

        config_parser = subparsers.add_parser('config', help='Show configuration')
        config_parser.set_defaults(func=self.cmd_config)

        return parser

    # Command implementations

    def cmd_start(self, args):
        """Track a project directory and report when interrupted"""
        idle_minutes = args.idle_minutes if args.idle_minutes is not None else config.idle_minutes
        if idle_minutes < 0:
            ui.print_error("Idle threshold must not be negative")
            return

        self.session = TrackingSession(
            Path(args.path),
            snapshot_dir_name=config.snapshot_dir_name,
            idle_threshold_ms=idle_minutes * 60 * 1000
        )

        try:
            self.session.start()
        except StartupError as e:
            ui.print_error(str(e))
            sys.exit(1)

        verbose = not args.quiet
        self.watcher = ProjectWatcher(
            self.session,
            ignore=config.ignored_names(),
            on_result=lambda result: ui.print_event(
                result, self.session.relative_path(result.path), verbose
            ),
            on_error=lambda error, path: ui.print_error(f"Watcher error on {path}: {error}"),
            initial_scan=config.initial_scan
        )

        ui.display_tracking_started(str(self.session.project_path), idle_minutes)

        try:
            # Ctrl+C during the initial scan still produces a report
            self.watcher.start()
            while self.watcher.is_alive():
                time.sleep(1)
            ui.print_warning("Watcher stopped unexpectedly")
        except KeyboardInterrupt:
            console.print("\n[dim]Stopping...[/dim]")

        self.finish(args.output or config.report_path)

    def finish(self, output_path):
        """Stop watching, then build, save and display the report"""
        # Let in-flight events complete before reading final state
        self.watcher.stop()
        self.session.close()

        languages = language_stats(
            self.session.project_path,
            top_n=config.top_languages,
            ignore=config.ignored_names()
        )
        dependencies = read_dependencies(self.session.project_path)

        report = reporter.build_report(self.session, languages, dependencies)

        try:
            path = reporter.save_report(report, output_path)
            ui.print_success(f"Report saved to {path}")
        except OSError as e:
            ui.print_error(f"Could not save report: {e}")

        ui.display_report(report, config.top_files)

    def cmd_config(self, args):
        """Show configuration"""
        console.print("[bold]Configuration:[/bold]")
        console.print(f"Idle threshold: {config.idle_minutes} minutes")
        console.print(f"Snapshot directory: {config.snapshot_dir_name}")
        console.print(f"Report path: {config.report_path}")
        console.print(f"Top languages: {config.top_languages}")
        console.print(f"Top files: {config.top_files}")
        console.print(f"Ignored: {', '.join(config.ignored_names())}")
        console.print(f"Initial scan: {'on' if config.initial_scan else 'off'}")


def main():
    """Main entry point"""
    try:
        cli = TrackerCLI()
        cli.run(sys.argv[1:])
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted[/dim]")
        sys.exit(0)
    except Exception as e:
        ui.print_error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
