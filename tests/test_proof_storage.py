import io
import shutil
import tempfile
import unittest
from pathlib import Path

from fastapi import UploadFile

from labsync.core.config import Settings
from labsync.core.exceptions import InvalidProofFileError
from labsync.services.file.proof_storage import ProofStorageService


def make_upload(filename, content=b"\x89PNG proof"):
    return UploadFile(file=io.BytesIO(content), filename=filename)


class TestProofStorageService(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.upload_dir = Path(tempfile.mkdtemp())
        self.storage = ProofStorageService(Settings(UPLOAD_DIR=self.upload_dir, PROOF_MAX_BYTES=64))

    def tearDown(self):
        shutil.rmtree(self.upload_dir, ignore_errors=True)

    async def test_save_proof_writes_file_under_user_directory(self):
        proof_id = await self.storage.save_proof("alice", make_upload("Screenshot.PNG"))

        self.assertTrue(proof_id.startswith(str(Path("proofs") / "alice")))
        self.assertTrue(proof_id.endswith(".png"))
        self.assertEqual((self.upload_dir / proof_id).read_bytes(), b"\x89PNG proof")

    async def test_user_id_is_sanitized(self):
        proof_id = await self.storage.save_proof("../../etc", make_upload("proof.pdf"))

        self.assertNotIn("..", proof_id)
        self.assertTrue((self.upload_dir / proof_id).exists())

    async def test_rejects_disallowed_extension(self):
        for filename in ["proof.exe", "proof", "proof.gif"]:
            with self.subTest(filename=filename):
                with self.assertRaises(InvalidProofFileError):
                    await self.storage.save_proof("alice", make_upload(filename))

    async def test_rejects_empty_and_oversized_files(self):
        with self.assertRaises(InvalidProofFileError):
            await self.storage.save_proof("alice", make_upload("proof.jpg", b""))
        with self.assertRaises(InvalidProofFileError):
            await self.storage.save_proof("alice", make_upload("proof.jpg", b"x" * 65))

    async def test_delete_proof(self):
        proof_id = await self.storage.save_proof("alice", make_upload("proof.jpeg"))

        self.assertTrue(await self.storage.delete_proof(proof_id))
        self.assertFalse((self.upload_dir / proof_id).exists())
        self.assertFalse(await self.storage.delete_proof(proof_id))
        self.assertTrue(await self.storage.delete_proof(None))


if __name__ == '__main__':
    unittest.main()
