"""Content generators for react-extras.

Each generator takes the run Context and returns the full text of one
file. Generators only read from the target directory (to pick the bun
lockfile variant) and never write.
"""

import json
from dataclasses import dataclass

from react_extras.context import Context, Framework, PackageManager
from react_extras.presets import get_tooling_preset


@dataclass(frozen=True)
class PackageManagerConfig:
    """Commands and images that differ between package managers."""

    setup_action: str
    install: str
    run: str
    run_x: str
    lockfile: str
    docker_base: str
    frozen_install: str


_DEPLOY_YML_TEMPLATE = """\
name: Deploy
on:
  push:
    branches: ["main"]
env:
  REGISTRY: ghcr.io
  IMAGE_NAME: ${{{{ github.repository }}}}

jobs:
  checks:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - {setup_action}
      - run: {install}
      - run: {run} check
      - run: {run} typecheck

  deploy:
    needs: checks
    runs-on: ubuntu-latest
    permissions:
      contents: read
      packages: write
    steps:
      - uses: actions/checkout@v4
      - name: Login to ghcr.io
        uses: docker/login-action@v2
        with:
          registry: ${{{{ env.REGISTRY }}}}
          username: ${{{{ github.actor }}}}
          password: ${{{{ secrets.GITHUB_TOKEN }}}}
      - name: Build image and push to registry
        uses: docker/build-push-action@v6
        with:
          context: .
          file: Dockerfile
          platforms: linux/amd64
          push: true
          tags: ${{{{ env.REGISTRY }}}}/${{{{ env.IMAGE_NAME }}}}:latest
      # Uncomment below after setting up your coolify instance.
      # - name: Deploy to Coolify
      #   run: |
      #     curl --request GET '${{{{ secrets.COOLIFY_WEBHOOK }}}}' --header 'Authorization: Bearer ${{{{ secrets.COOLIFY_TOKEN }}}}'
"""

_VITE_DOCKERFILE_TEMPLATE = """\
FROM {docker_base} AS base

FROM base AS deps
WORKDIR /app
COPY package.json {lockfile} ./
RUN {frozen_install}

FROM base AS builder
WORKDIR /app
COPY --from=deps /app/node_modules ./node_modules
COPY . .
RUN {run} build

FROM nginx:alpine AS runner
WORKDIR /usr/share/nginx/html
RUN rm -rf ./*
COPY --from=builder /app/dist .
COPY --from=builder /app/nginx.conf /etc/nginx/conf.d/default.conf
EXPOSE 80
CMD ["nginx", "-g", "daemon off;"]
"""

_NEXTJS_DOCKERFILE_TEMPLATE = """\
FROM {docker_base} AS base

FROM base AS deps
WORKDIR /app
COPY package.json {lockfile} ./
RUN {frozen_install}

FROM base AS builder
WORKDIR /app
{builder_setup}COPY --from=deps /app/node_modules ./node_modules
COPY . .
ENV NEXT_TELEMETRY_DISABLED=1
RUN {run} build

FROM base AS runner
WORKDIR /app
ENV NODE_ENV=production
ENV NEXT_TELEMETRY_DISABLED=1
COPY --from=builder /app/public ./public
COPY --from=builder /app/.next/standalone ./
COPY --from=builder /app/.next/static ./.next/static
EXPOSE 3000
ENV PORT=3000
CMD ["node", "server.js"]
"""

_PRE_COMMIT_TEMPLATE = """\
#!/bin/sh
. "$(dirname "$0")/_/husky.sh"

{run_x} lint-staged
"""


def get_pm_config(ctx: Context) -> PackageManagerConfig:
    """Return the package manager specific commands for *ctx*."""
    node_image = f"node:{ctx.node_version}-alpine"
    pm = ctx.package_manager

    if pm == PackageManager.BUN:
        bun_lockfile = "bun.lockb" if (ctx.cwd / "bun.lockb").exists() else "bun.lock"
        return PackageManagerConfig(
            setup_action="uses: oven-sh/setup-bun@v2",
            install="bun install",
            run="bun run",
            run_x="bun run",
            lockfile=bun_lockfile,
            docker_base="oven/bun:alpine",
            frozen_install="bun install --frozen-lockfile",
        )
    if pm == PackageManager.PNPM:
        return PackageManagerConfig(
            setup_action="uses: pnpm/action-setup@v4",
            install="pnpm install",
            run="pnpm",
            run_x="pnpm exec",
            lockfile="pnpm-lock.yaml",
            docker_base=node_image,
            frozen_install="corepack enable && pnpm install --frozen-lockfile",
        )
    if pm == PackageManager.YARN:
        return PackageManagerConfig(
            setup_action=_setup_node_action(ctx.node_version, "yarn"),
            install="yarn install",
            run="yarn",
            run_x="yarn run",
            lockfile="yarn.lock",
            docker_base=node_image,
            frozen_install="corepack enable && yarn install --frozen-lockfile",
        )
    return PackageManagerConfig(
        setup_action=_setup_node_action(ctx.node_version, "npm"),
        install="npm ci",
        run="npm run",
        run_x="npx",
        lockfile="package-lock.json",
        docker_base=node_image,
        frozen_install="npm ci",
    )


def _setup_node_action(node_version: str, cache: str) -> str:
    """setup-node step, indented to sit inside a workflow step list."""
    lines = [
        "uses: actions/setup-node@v4",
        "        with:",
        f"          node-version: {node_version}",
        f"          cache: {cache}",
    ]
    return "\n".join(lines)


def generate_deploy_yml(ctx: Context) -> str:
    """GitHub Actions workflow: lint/typecheck, then build and push an image."""
    config = get_pm_config(ctx)
    return _DEPLOY_YML_TEMPLATE.format(
        setup_action=config.setup_action,
        install=config.install,
        run=config.run,
    )


def generate_dockerfile(ctx: Context) -> str:
    """Multi-stage Dockerfile; standalone Node server for Next.js, nginx otherwise."""
    config = get_pm_config(ctx)

    if ctx.framework == Framework.NEXTJS:
        builder_setup = ""
        if ctx.package_manager in (PackageManager.PNPM, PackageManager.YARN):
            builder_setup = f"RUN corepack enable {ctx.package_manager.value}\n"
        return _NEXTJS_DOCKERFILE_TEMPLATE.format(
            docker_base=config.docker_base,
            lockfile=config.lockfile,
            frozen_install=config.frozen_install,
            builder_setup=builder_setup,
            run=config.run,
        )

    return _VITE_DOCKERFILE_TEMPLATE.format(
        docker_base=config.docker_base,
        lockfile=config.lockfile,
        frozen_install=config.frozen_install,
        run=config.run,
    )


def generate_pre_commit_hook(ctx: Context) -> str:
    """Husky pre-commit hook that runs lint-staged."""
    config = get_pm_config(ctx)
    return _PRE_COMMIT_TEMPLATE.format(run_x=config.run_x)


def generate_extensions_json(ctx: Context) -> str:
    preset = get_tooling_preset(ctx.tooling)
    return json.dumps({"recommendations": preset["vscode_extensions"]}, indent=2) + "\n"


def generate_config_ts(ctx: Context) -> str:
    """API base URL module read by the API client."""
    if ctx.framework == Framework.NEXTJS:
        env_lookup = "process.env.NEXT_PUBLIC_API_BASE_URL"
    else:
        env_lookup = "import.meta.env.VITE_API_BASE_URL"

    return f'export const apiBaseUrl =\n  {env_lookup} ?? "";\n'


def check_script(ctx: Context) -> str:
    return get_tooling_preset(ctx.tooling)["check_script"]


def lint_staged_config(ctx: Context) -> dict[str, str | list[str]]:
    return dict(get_tooling_preset(ctx.tooling)["lint_staged"])
