"""Command-line entry point run by the action step."""

from __future__ import annotations

import argparse
from functools import partial

from setup_phpstan_core import DEFAULT_CONFIG, ActionsHost, LocalCache, SetupError, default_cache_root, load_inputs
from setup_phpstan_core.logging_setup import configure_logging
from setup_phpstan_github import GitHubClient, download_release

from .runner import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="setup-phpstan", description="Install a phpstan.phar release for CI jobs")
    parser.add_argument("--version", default=None, help="Release tag or 'latest' (default: INPUT_VERSION or latest)")
    parser.add_argument("--install-path", default=None, help="Directory that receives phpstan.phar")
    parser.add_argument("--path", default=None, help="Local phpstan executable to use instead of downloading")
    parser.add_argument("--github-token", default=None, help="Token for GitHub API requests (default: GITHUB_TOKEN)")
    parser.add_argument("--cache-dir", default=None, help="Local cache root (default: RUNNER_TOOL_CACHE/setup-phpstan)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = DEFAULT_CONFIG
    logger = configure_logging(config)
    host = ActionsHost()

    try:
        inputs = load_inputs(
            version=args.version,
            install_path=args.install_path,
            path=args.path,
            github_token=args.github_token,
        )
        client = GitHubClient(token=inputs.github_token)
        cache = LocalCache(default_cache_root() if args.cache_dir is None else args.cache_dir)
        run(
            config,
            inputs,
            service=client,
            cache=cache,
            download=partial(download_release, client),
            host=host,
        )
    except SetupError as exc:
        host.set_failed(f"{config.out_prefix} {exc.describe()}")
    except Exception as exc:
        logger.debug("unexpected failure", exc_info=True)
        host.set_failed(f"{config.out_prefix} {exc}")

    return host.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
