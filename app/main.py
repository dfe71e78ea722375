from __future__ import annotations

import logging

import streamlit as st
from streamlit.runtime.uploaded_file_manager import UploadedFile

from pdfmerger.adapters.pymupdf_adapter import PyMuPdfAdapter
from pdfmerger.domain.models import RawFile
from pdfmerger.infrastructure.config import AppConfig
from pdfmerger.infrastructure.logging_config import configure_logging
from pdfmerger.services.merge_service import MergeService
from pdfmerger.services.probe_service import ProbeService
from pdfmerger.services.selection_service import SelectionList
from pdfmerger.services.validation_service import classify

LOGGER = logging.getLogger("pdfmerger.app")


def _init_services() -> tuple[AppConfig, ProbeService, MergeService]:
    config = AppConfig()
    adapter = PyMuPdfAdapter()
    return config, ProbeService(adapter, config), MergeService(adapter)


def _init_state() -> None:
    st.session_state.setdefault("selection", SelectionList())
    st.session_state.setdefault("merged_pdf_bytes", b"")
    st.session_state.setdefault("merged_pdf_name", "")
    st.session_state.setdefault("uploader_token", 0)
    st.session_state.setdefault("notices", [])


def _reset_download() -> None:
    st.session_state.merged_pdf_bytes = b""
    st.session_state.merged_pdf_name = ""


def _store_download(pdf_bytes: bytes, filename: str) -> None:
    st.session_state.merged_pdf_bytes = pdf_bytes
    st.session_state.merged_pdf_name = filename


def _notify(level: str, text: str) -> None:
    st.session_state.notices.append((level, text))


def _render_notices() -> None:
    renderers = {"success": st.success, "warning": st.warning, "error": st.error}
    for level, text in st.session_state.notices:
        renderers[level](text)
    st.session_state.notices = []


def _to_raw_files(uploaded: list[UploadedFile]) -> list[RawFile]:
    return [
        RawFile(name=item.name, content_type=item.type or "", content=item.getvalue())
        for item in uploaded
    ]


def _add_uploaded_files(probe_service: ProbeService, uploaded: list[UploadedFile]) -> None:
    selection: SelectionList = st.session_state.selection
    classification = classify(_to_raw_files(uploaded))

    if classification.invalid:
        names = "\n".join(f"- {item.name}" for item in classification.invalid)
        _notify("warning", f"These files are not PDFs and will be ignored:\n{names}")
    if not classification.valid:
        _notify("error", "No valid PDF files were selected.")
        return

    try:
        result = probe_service.probe_batch(classification.valid)
    except Exception as exc:
        LOGGER.error("Probing uploaded files failed: %s", exc)
        _notify("error", str(exc))
        return

    selection.add(result.documents)
    _reset_download()
    summary = probe_service.build_probe_summary(result)
    _notify("warning" if result.error_count else "success", summary)


def _render_selection(selection: SelectionList) -> None:
    last_index = len(selection) - 1
    for index, document in enumerate(selection):
        name_col, up_col, down_col, remove_col = st.columns([6, 1, 1, 1])
        with name_col:
            st.markdown(f"**{index + 1}. {document.name}** ({document.page_count} pages)")
        with up_col:
            if st.button("↑", key=f"move_up_{index}", disabled=index == 0):
                selection.move_up(index)
                _reset_download()
                st.rerun()
        with down_col:
            if st.button("↓", key=f"move_down_{index}", disabled=index == last_index):
                selection.move_down(index)
                _reset_download()
                st.rerun()
        with remove_col:
            if st.button("✕", key=f"remove_{index}"):
                selection.remove_at(index)
                _reset_download()
                st.rerun()


def _merge_section(config: AppConfig, merge_service: MergeService) -> None:
    selection: SelectionList = st.session_state.selection

    if st.button("Merge PDFs", type="primary", use_container_width=True):
        documents = selection.snapshot()
        if len(documents) < config.min_merge_documents:
            st.error(f"Select at least {config.min_merge_documents} PDF files to merge.")
        else:
            try:
                merge_service.merge_and_download(documents, _store_download)
            except Exception as exc:
                LOGGER.error("Merge request failed: %s", exc)
                st.error(f"Unable to merge PDFs: {exc}")

    if st.session_state.merged_pdf_bytes:
        st.download_button(
            "Download merged PDF",
            data=st.session_state.merged_pdf_bytes,
            file_name=st.session_state.merged_pdf_name,
            mime="application/pdf",
            use_container_width=True,
        )


def main() -> None:
    st.set_page_config(page_title="Merge PDFs", layout="centered")
    config, probe_service, merge_service = _init_services()
    configure_logging(config.log_level)
    _init_state()

    st.title("Merge PDFs")
    st.caption(
        "Upload PDFs, arrange them in the order you want, then merge them into one file. "
        f"Limits: {config.max_pdf_size_mb} MB per PDF, {config.max_batch_size_mb} MB per upload."
    )

    uploaded = st.file_uploader(
        "Select PDF files",
        accept_multiple_files=True,
        key=f"uploader_{st.session_state.uploader_token}",
    )
    if st.button("Add selected files", disabled=not uploaded):
        _add_uploaded_files(probe_service, uploaded)
        st.session_state.uploader_token += 1
        st.rerun()
    _render_notices()

    selection: SelectionList = st.session_state.selection
    if not len(selection):
        st.info("No PDFs selected yet.")
        return

    st.subheader("Selected PDFs", anchor=False)
    _render_selection(selection)

    info_col, clear_col = st.columns([3, 1])
    with info_col:
        st.write(f"{len(selection)} file(s), {selection.total_pages()} page(s) in total")
    with clear_col:
        if st.button("Clear all"):
            selection.clear()
            _reset_download()
            st.rerun()

    _merge_section(config, merge_service)


if __name__ == "__main__":
    main()
