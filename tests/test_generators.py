"""Tests for content generators and tooling presets."""

import json

import pytest
import yaml

from react_extras.context import Framework, PackageManager, Tooling
from react_extras.errors import AssetNotFound
from react_extras.generators import (
    check_script,
    generate_config_ts,
    generate_deploy_yml,
    generate_dockerfile,
    generate_extensions_json,
    generate_pre_commit_hook,
    get_pm_config,
    lint_staged_config,
)
from react_extras.presets import get_tooling_preset, load_tooling_presets


class TestPackageManagerConfig:
    """Test per-package-manager commands."""

    def test_bun_uses_text_lockfile_by_default(self, make_context):
        config = get_pm_config(make_context(package_manager=PackageManager.BUN))
        assert config.lockfile == "bun.lock"
        assert config.docker_base == "oven/bun:alpine"

    def test_bun_uses_binary_lockfile_when_present(self, make_context, tmp_path):
        (tmp_path / "bun.lockb").write_text("")
        config = get_pm_config(make_context(package_manager=PackageManager.BUN))
        assert config.lockfile == "bun.lockb"

    def test_node_image_uses_context_version(self, make_context):
        config = get_pm_config(make_context(package_manager=PackageManager.PNPM, node_version="20"))
        assert config.docker_base == "node:20-alpine"
        assert config.run_x == "pnpm exec"

    def test_npm(self, make_context):
        config = get_pm_config(make_context())
        assert config.install == "npm ci"
        assert config.run == "npm run"
        assert config.run_x == "npx"
        assert config.lockfile == "package-lock.json"


class TestDeployYml:
    """Test the GitHub Actions workflow generator."""

    @pytest.mark.parametrize("pm", list(PackageManager))
    def test_is_valid_yaml(self, make_context, pm):
        data = yaml.safe_load(generate_deploy_yml(make_context(package_manager=pm)))
        assert set(data["jobs"]) == {"checks", "deploy"}
        assert data["jobs"]["deploy"]["needs"] == "checks"

    def test_expressions_are_not_mangled(self, make_context):
        content = generate_deploy_yml(make_context())
        assert "IMAGE_NAME: ${{ github.repository }}" in content
        assert "${{ env.REGISTRY }}/${{ env.IMAGE_NAME }}:latest" in content

    def test_npm_steps(self, make_context):
        content = generate_deploy_yml(make_context(node_version="20"))
        data = yaml.safe_load(content)
        steps = data["jobs"]["checks"]["steps"]
        assert steps[1] == {
            "uses": "actions/setup-node@v4",
            "with": {"node-version": 20, "cache": "npm"},
        }
        assert {"run": "npm ci"} in steps
        assert {"run": "npm run check"} in steps
        assert {"run": "npm run typecheck"} in steps

    def test_pnpm_steps(self, make_context):
        content = generate_deploy_yml(make_context(package_manager=PackageManager.PNPM))
        assert "- uses: pnpm/action-setup@v4" in content
        assert "- run: pnpm check" in content

    def test_is_deterministic(self, make_context):
        ctx = make_context(package_manager=PackageManager.YARN)
        assert generate_deploy_yml(ctx) == generate_deploy_yml(ctx)


class TestDockerfile:
    """Test Dockerfile generation per framework."""

    def test_vite_serves_with_nginx(self, make_context):
        content = generate_dockerfile(make_context(framework=Framework.VITE_TANSTACK_ROUTER))
        assert "FROM nginx:alpine AS runner" in content
        assert "COPY --from=builder /app/nginx.conf /etc/nginx/conf.d/default.conf" in content
        assert "COPY package.json package-lock.json ./" in content

    def test_nextjs_runs_standalone_server(self, make_context):
        content = generate_dockerfile(make_context())
        assert "COPY --from=builder /app/.next/standalone ./" in content
        assert 'CMD ["node", "server.js"]' in content
        assert "RUN npm ci" in content
        assert "corepack" not in content

    @pytest.mark.parametrize("pm", [PackageManager.PNPM, PackageManager.YARN])
    def test_nextjs_enables_corepack_in_builder(self, make_context, pm):
        content = generate_dockerfile(make_context(package_manager=pm))
        assert f"RUN corepack enable {pm.value}\nCOPY --from=deps" in content

    def test_nextjs_bun_copies_detected_lockfile(self, make_context, tmp_path):
        (tmp_path / "bun.lockb").write_text("")
        content = generate_dockerfile(make_context(package_manager=PackageManager.BUN))
        assert "COPY package.json bun.lockb ./" in content
        assert "RUN bun install --frozen-lockfile" in content


class TestSmallGenerators:
    """Test hook, extensions, config.ts and script generators."""

    def test_pre_commit_hook_runs_lint_staged(self, make_context):
        content = generate_pre_commit_hook(make_context(package_manager=PackageManager.PNPM))
        assert content.startswith("#!/bin/sh\n")
        assert content.endswith("pnpm exec lint-staged\n")

    def test_extensions_for_biome(self, make_context):
        data = json.loads(generate_extensions_json(make_context()))
        assert "biomejs.biome" in data["recommendations"]
        assert "dbaeumer.vscode-eslint" not in data["recommendations"]

    def test_extensions_for_eslint_prettier(self, make_context):
        content = generate_extensions_json(make_context(tooling=Tooling.ESLINT_PRETTIER))
        data = json.loads(content)
        assert "esbenp.prettier-vscode" in data["recommendations"]
        assert content.endswith("}\n")

    def test_config_ts_nextjs(self, make_context):
        assert "process.env.NEXT_PUBLIC_API_BASE_URL" in generate_config_ts(make_context())

    def test_config_ts_vite(self, make_context):
        content = generate_config_ts(make_context(framework=Framework.VITE_TANSTACK_ROUTER))
        assert "import.meta.env.VITE_API_BASE_URL" in content

    def test_check_script(self, make_context):
        assert check_script(make_context()) == "biome check ."
        assert (
            check_script(make_context(tooling=Tooling.ESLINT_PRETTIER))
            == "eslint . && prettier --check ."
        )

    def test_lint_staged_config(self, make_context):
        assert lint_staged_config(make_context()) == {
            "*": "biome check --write --no-errors-on-unmatched"
        }
        assert lint_staged_config(make_context(tooling=Tooling.ESLINT_PRETTIER)) == {
            "*.{js,jsx,ts,tsx,css,md}": "prettier --write",
            "*.{js,jsx,ts,tsx}": "eslint",
        }


class TestToolingPresets:
    """Test preset loading."""

    def test_every_tooling_has_a_preset(self):
        presets = load_tooling_presets()
        for tooling in Tooling:
            assert tooling.value in presets

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(AssetNotFound):
            load_tooling_presets(tmp_path / "nope.yaml")

    def test_missing_tooling_raises(self, tmp_path):
        presets_file = tmp_path / "tooling.yaml"
        presets_file.write_text(yaml.dump({"biome": {"check_script": "x"}}))
        with pytest.raises(AssetNotFound):
            get_tooling_preset(Tooling.ESLINT_PRETTIER, presets_file)

    def test_incomplete_preset_raises(self, tmp_path):
        presets_file = tmp_path / "tooling.yaml"
        presets_file.write_text(yaml.dump({"biome": {"check_script": "x"}}))
        with pytest.raises(AssetNotFound, match="lint_staged"):
            get_tooling_preset(Tooling.BIOME, presets_file)
