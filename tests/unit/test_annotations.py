"""
Unit tests for @swagger annotation scanning.
"""

import logging

from charcole.swagger.annotations import (
    collect_annotations,
    default_api_patterns,
    extract_annotation_blocks,
)

TS_SOURCE = '''
import { Router } from "express";

/**
 * Plain comment, not documentation.
 */
const router = Router();

/**
 * @swagger
 * /api/health:
 *   get:
 *     summary: Health check
 *     responses:
 *       200:
 *         description: OK
 */
router.get("/health", handler);

/**
 * @openapi
 * components:
 *   schemas:
 *     Item:
 *       type: object
 * tags:
 *   - name: Items
 */
'''

PY_SOURCE = '''
def list_items():
    """
    @swagger
    /api/items:
      get:
        summary: List items
    """
'''


class TestExtractAnnotationBlocks:

    def test_jsdoc_blocks(self):
        blocks = extract_annotation_blocks(TS_SOURCE)

        assert len(blocks) == 2
        assert blocks[0].startswith("/api/health:")
        assert "summary: Health check" in blocks[0]
        assert blocks[1].startswith("components:")

    def test_untagged_comments_are_ignored(self):
        assert extract_annotation_blocks("/** just a comment */\n/**\n * @param x\n */") == []

    def test_python_docstrings(self):
        blocks = extract_annotation_blocks(PY_SOURCE, python=True)

        assert blocks == ["/api/items:\n  get:\n    summary: List items\n"]

    def test_python_docstrings_need_python_mode(self):
        assert extract_annotation_blocks(PY_SOURCE) == []


class TestCollectAnnotations:

    def test_paths_components_and_tags(self, write_file, temp_output_dir):
        write_file("src/routes/index.ts", TS_SOURCE)
        write_file("src/modules/items/api.py", PY_SOURCE)

        collected = collect_annotations([
            f"{temp_output_dir}/src/routes/**/*.ts",
            f"{temp_output_dir}/src/modules/**/*.py",
        ])

        assert set(collected["paths"]) == {"/api/health", "/api/items"}
        assert collected["paths"]["/api/health"]["get"]["summary"] == "Health check"
        assert collected["components"]["schemas"]["Item"] == {"type": "object"}
        assert collected["tags"] == [{"name": "Items"}]

    def test_operations_on_the_same_path_are_merged(self, write_file, temp_output_dir):
        write_file("a.js", "/**\n * @swagger\n * /x:\n *   get:\n *     summary: read\n */")
        write_file("b.js", "/**\n * @swagger\n * /x:\n *   post:\n *     summary: write\n */")

        collected = collect_annotations([f"{temp_output_dir}/*.js"])

        assert set(collected["paths"]["/x"]) == {"get", "post"}

    def test_malformed_block_is_skipped_with_warning(self, write_file, temp_output_dir, caplog):
        write_file("bad.js", "/**\n * @swagger\n * /x: [unclosed\n */")
        write_file("good.js", "/**\n * @swagger\n * /y:\n *   get: {}\n */")

        with caplog.at_level(logging.WARNING):
            collected = collect_annotations([f"{temp_output_dir}/*.js"])

        assert list(collected["paths"]) == ["/y"]
        assert "Skipping malformed annotation" in caplog.text

    def test_undecodable_file_is_skipped_with_warning(self, temp_output_dir, write_file, caplog):
        (temp_output_dir / "latin1.ts").write_bytes(b"// caf\xe9\n")
        write_file("good.ts", "/**\n * @swagger\n * /y:\n *   get: {}\n */")

        with caplog.at_level(logging.WARNING):
            collected = collect_annotations([f"{temp_output_dir}/*.ts"])

        assert list(collected["paths"]) == ["/y"]
        assert "Skipping unreadable file" in caplog.text

    def test_no_matches(self, temp_output_dir):
        assert collect_annotations([f"{temp_output_dir}/nothing/**/*.ts"]) == {
            "paths": {},
            "components": {},
            "tags": [],
        }


class TestDefaultApiPatterns:

    def test_typescript_project(self, write_file, temp_output_dir):
        write_file("src/app.ts", "")

        patterns = default_api_patterns(temp_output_dir)

        assert patterns == [
            f"{temp_output_dir / 'src'}/modules/**/*.ts",
            f"{temp_output_dir / 'src'}/routes/**/*.ts",
        ]

    def test_javascript_project(self, write_file, temp_output_dir):
        write_file("src/app.js", "")

        assert all(p.endswith("*.js") for p in default_api_patterns(temp_output_dir))

    def test_missing_src_defaults_to_javascript(self, temp_output_dir):
        assert all(p.endswith("*.js") for p in default_api_patterns(temp_output_dir))
