import json
import sys
import tempfile
import subprocess
from pathlib import Path

import pandas as pd
import streamlit as st
from dotenv import load_dotenv


load_dotenv()
st.set_page_config(page_title="Onboarding Access Checklist", layout="wide")

st.title("Onboarding Access Checklist")
st.write("Upload a client's onboarding answers to see which account access is still missing.")

with st.sidebar:
    st.header("Inputs")

    answers_file = st.file_uploader(
        "Answers (JSON or XLSX export)",
        type=["json", "xlsx"],
        accept_multiple_files=False
    )
    st.caption("XLSX exports use columns A=step key, B=field, C=value.")

    run_btn = st.button("Build checklist", type="primary")


if run_btn:
    if not answers_file:
        st.error("Please upload an answers JSON or XLSX file.")
        st.stop()

    with tempfile.TemporaryDirectory() as tmp:
        tmp_path = Path(tmp)

        answers_path = tmp_path / f"answers_{answers_file.name}"
        answers_path.write_bytes(answers_file.getbuffer())

        out_dir = tmp_path / "output"
        out_dir.mkdir(parents=True, exist_ok=True)

        cmd = [
            sys.executable, "-m", "onboarding_access.cli",
            "checklist",
            "--answers", str(answers_path),
            "--out-dir", str(out_dir),
        ]
        proc = subprocess.run(cmd, capture_output=True, text=True)

        if proc.returncode != 0:
            st.error("Checklist failed.")
            st.code(proc.stdout or "", language="text")
            st.code(proc.stderr or "", language="text")
            st.stop()

        report_csv = out_dir / "access_report.csv"
        summary_json = out_dir / "summary.json"

        if not report_csv.exists() or not summary_json.exists():
            st.error("No report produced. Check the output below.")
            st.code(proc.stdout or "", language="text")
            st.stop()

        summary = json.loads(summary_json.read_text(encoding="utf-8"))

        col1, col2, col3 = st.columns(3)
        col1.metric("Missing", summary["missing_count"])
        col2.metric("Present", summary["present_count"])
        col3.metric("Not applicable", summary["not_applicable_count"])

        df = pd.read_csv(report_csv)
        st.subheader("Access items")
        st.dataframe(df, use_container_width=True)

        st.subheader("Missing access request")
        st.caption(summary["short_text"])
        st.code(summary["missing_access_text"], language="text")

        st.subheader("Downloads")

        st.download_button(
            "Download access_report.csv",
            data=report_csv.read_bytes(),
            file_name="access_report.csv",
            mime="text/csv"
        )
        st.download_button(
            "Download summary.json",
            data=summary_json.read_bytes(),
            file_name="summary.json",
            mime="application/json"
        )

        with st.expander("Show checklist logs"):
            st.code(proc.stdout or "(no stdout)", language="text")
            st.code(proc.stderr or "(no stderr)", language="text")
