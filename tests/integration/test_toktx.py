"""
End-to-end atlas build with the real toktx
"""
import os
import shutil
import tempfile

import pytest
from PIL import Image

from atlaspacker import build_atlas

TOKTX = os.getenv("TOKTX_PATH") or shutil.which("toktx")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(TOKTX is None, reason="toktx not installed"),
]

KTX2_MAGIC = b"\xabKTX 20\xbb\r\n\x1a\n"


class TestToktxIntegration:
    """Build real KTX2 texture arrays"""

    def test_build_texture_array(self):
        """Test that a multi-sheet atlas produces a valid KTX2 file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            src = os.path.join(tmpdir, "src")
            os.mkdir(src)
            for i in range(6):
                Image.new('LA', (40, 40), (i * 40, 255)).save(os.path.join(src, f"{i}.png"))

            result = build_atlas([src], tmpdir, "integration", sheet_size=64, encoder_path=TOKTX)

            assert result.encoded
            assert result.bin_count == 6
            with open(result.texture_path, 'rb') as f:
                assert f.read(12) == KTX2_MAGIC
            assert result.description_path.exists()
