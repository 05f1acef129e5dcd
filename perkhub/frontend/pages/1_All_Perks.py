import streamlit as st

from perkhub.frontend.views import render_all_perks

st.set_page_config(page_title="All Perks | Perkhub", layout="wide")

render_all_perks()
